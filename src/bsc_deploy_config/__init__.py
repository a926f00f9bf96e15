"""
bsc-deploy-config: Python library for smart contract deployment configuration on BSC
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeploymentConfig, build_config, load_config
from .exceptions import (
    CompilerNotFoundError,
    CompilerVersionError,
    DeployConfigError,
    MissingEnvironmentError,
    NetworkNotFoundError,
    ProviderConnectionError,
    RpcError,
)
from .providers import HDWalletProvider, bsc_endpoint, get_bsc_wallet_provider
from .types import CompilerSettings, NetworkConfig, OptimizerSettings, ProjectConfig

try:
    __version__ = version("bsc-deploy-config")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentConfig",
    "build_config",
    "load_config",
    "HDWalletProvider",
    "bsc_endpoint",
    "get_bsc_wallet_provider",
    "NetworkConfig",
    "OptimizerSettings",
    "CompilerSettings",
    "ProjectConfig",
    "DeployConfigError",
    "NetworkNotFoundError",
    "MissingEnvironmentError",
    "CompilerNotFoundError",
    "CompilerVersionError",
    "RpcError",
    "ProviderConnectionError",
]
