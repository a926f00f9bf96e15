"""Environment variable loading for bsc-deploy-config library."""

import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

import structlog
from dotenv import load_dotenv

from .constants import ENV_VARS, MNEMONIC_ENV, NETWORK_CONFIG
from .exceptions import MissingEnvironmentError, NetworkNotFoundError
from .paths import get_default_env_file

logger = structlog.get_logger()


def load_environment(
    env_file: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Optional[str]]:
    """
    Collect the variables the deployment config reads.

    Args:
        env_file: Dotenv file to load first (defaults to ./.env, ignored if absent).
                  Variables already set in the process are not overridden.
        environ: Explicit variable mapping; skips dotenv and the process environment

    Returns:
        Dictionary of known variable name -> value (None when unset)
    """
    if environ is None:
        if env_file is None:
            env_file = get_default_env_file()
        if load_dotenv(env_file, override=False):
            logger.debug("Loaded dotenv file", path=str(env_file))
        environ = os.environ

    return {name: environ.get(name) for name in ENV_VARS}


def required_variables(network: str) -> List[str]:
    """
    List the environment variables a network needs at deploy time.

    Args:
        network: Network key, e.g. "bscTestnet"

    Returns:
        Variable names

    Raises:
        NetworkNotFoundError: If network is not configured
    """
    if network not in NETWORK_CONFIG:
        raise NetworkNotFoundError(f"Network '{network}' is not configured")

    network_config = NETWORK_CONFIG[network]
    names = []
    if "endpoint" in network_config:
        names.append(MNEMONIC_ENV)
    names.append(network_config["from_env"])
    return names


def require_environment(env: Mapping[str, Optional[str]], names: Iterable[str]) -> None:
    """
    Check that variables are present and non-empty.

    Raises:
        MissingEnvironmentError: Naming every missing variable
    """
    missing = [name for name in names if not env.get(name)]
    if missing:
        raise MissingEnvironmentError(
            "Missing environment variables: " + ", ".join(f"${name}" for name in missing)
        )
