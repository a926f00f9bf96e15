"""Path management utilities for bsc-deploy-config library."""

from pathlib import Path
from typing import Optional, Union

from .types import ProjectConfig


def get_default_env_file() -> Path:
    """
    Get default dotenv file location.

    Returns:
        Path to ./.env
    """
    return Path.cwd() / ".env"


def get_default_output_path() -> Path:
    """
    Get default location of the emitted configuration document.

    Returns:
        Path to ./deploy-config.json
    """
    return Path.cwd() / "deploy-config.json"


def resolve_project_paths(
    config: ProjectConfig, root: Optional[Union[Path, str]] = None
) -> tuple[Path, Path]:
    """
    Resolve contract source and build directories against a project root.

    Args:
        config: Project configuration
        root: Project root (defaults to current directory)

    Returns:
        Tuple of (contracts_dir, build_dir), both absolute
    """
    if root is None:
        root = Path.cwd()
    else:
        root = Path(root).absolute()

    contracts_dir = (root / config.contracts_directory).resolve()
    build_dir = (root / config.contracts_build_directory).resolve()

    return (contracts_dir, build_dir)
