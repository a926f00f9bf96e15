"""Main API for bsc-deploy-config library."""

import json
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from .constants import (
    API_KEY_CONFIG,
    CONTRACTS_BUILD_DIRECTORY,
    CONTRACTS_DIRECTORY,
    MNEMONIC_ENV,
    NETWORK_CONFIG,
    OPTIMIZER_ENABLED,
    OPTIMIZER_RUNS,
    PLUGINS,
    SOLC_VERSION,
)
from .environment import load_environment, require_environment, required_variables
from .exceptions import CompilerNotFoundError, NetworkNotFoundError
from .paths import get_default_output_path
from .providers import HDWalletProvider, bsc_endpoint, get_bsc_wallet_provider
from .types import CompilerSettings, NetworkConfig, OptimizerSettings, ProjectConfig
from .versions import fetch_solc_releases, resolve_compiler_version

if not structlog.is_configured():
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

logger = structlog.get_logger()


def build_config(env: Mapping[str, Optional[str]]) -> ProjectConfig:
    """
    Build the deployment configuration from environment values.

    Missing variables are passed through as None; nothing is validated here.
    Wallet providers are created lazily by each network's provider factory.

    Args:
        env: Variable name -> value mapping (see load_environment)

    Returns:
        ProjectConfig
    """
    mnemonic = env.get(MNEMONIC_ENV)

    networks: Dict[str, NetworkConfig] = {}
    for name, network_config in NETWORK_CONFIG.items():
        network = NetworkConfig(
            name=name,
            network_id=network_config["network_id"],
            from_address=env.get(network_config["from_env"]),
            host=network_config.get("host"),
            port=network_config.get("port"),
            gas_price=network_config.get("gas_price"),
            confirmations=network_config.get("confirmations"),
            timeout_blocks=network_config.get("timeout_blocks"),
            skip_dry_run=network_config.get("skip_dry_run"),
            chain_name=network_config.get("chain_name"),
            block_explorer_url=network_config.get("block_explorer_url"),
        )

        if "endpoint" in network_config:
            network.endpoint = bsc_endpoint(network_config["endpoint"])
            network.provider = partial(
                get_bsc_wallet_provider, network_config["endpoint"], mnemonic
            )

        networks[name] = network

    return ProjectConfig(
        api_keys={service: env.get(var) for service, var in API_KEY_CONFIG.items()},
        networks=networks,
        contracts_directory=CONTRACTS_DIRECTORY,
        contracts_build_directory=CONTRACTS_BUILD_DIRECTORY,
        compilers={
            "solc": CompilerSettings(
                version=SOLC_VERSION,
                optimizer=OptimizerSettings(enabled=OPTIMIZER_ENABLED, runs=OPTIMIZER_RUNS),
            )
        },
        plugins=list(PLUGINS),
    )


class DeploymentConfig:
    """Deployment configuration for the development chain and BSC networks."""

    def __init__(
        self,
        env: Optional[Mapping[str, Optional[str]]] = None,
        env_file: Optional[Union[Path, str]] = None,
    ):
        """
        Initialize the deployment config.

        Args:
            env: Explicit variable mapping. If None, variables are read from
                 env_file (defaults to ./.env) and the process environment.
            env_file: Dotenv file to load when env is None
        """
        if env is None:
            env = load_environment(env_file)

        self._env = dict(env)
        self._config = build_config(self._env)

        logger.debug("Deployment config built", networks=self.network_names())

    @property
    def project(self) -> ProjectConfig:
        return self._config

    def network_names(self) -> List[str]:
        """Configured network keys, in declaration order."""
        return list(self._config.networks)

    def has_network(self, network: str) -> bool:
        return network in self._config.networks

    def network(self, network: str) -> NetworkConfig:
        """
        Get a network definition.

        Raises:
            NetworkNotFoundError: If network is not configured
        """
        if not self.has_network(network):
            raise NetworkNotFoundError(f"Network '{network}' is not configured")
        return self._config.networks[network]

    def provider(self, network: str) -> HDWalletProvider:
        """
        Build the wallet provider for a network.

        Raises:
            NetworkNotFoundError: If network is unknown or has no provider
                                  (e.g., the development network)
            MissingEnvironmentError: If the mnemonic is unset
        """
        network_config = self.network(network)
        if network_config.provider is None:
            raise NetworkNotFoundError(
                f"Network '{network}' connects directly and has no wallet provider"
            )
        return network_config.provider()

    def api_key(self, service: str) -> Optional[str]:
        """API key for a block explorer service, None when unset or unknown."""
        return self._config.api_keys.get(service)

    def compiler(self, name: str = "solc") -> CompilerSettings:
        """
        Get compiler settings.

        Raises:
            CompilerNotFoundError: If compiler is not configured
        """
        if name not in self._config.compilers:
            raise CompilerNotFoundError(f"Compiler '{name}' is not configured")
        return self._config.compilers[name]

    def compiler_release(self, available: Optional[List[str]] = None) -> str:
        """
        Resolve the solc version constraint to a concrete release.

        Args:
            available: Known releases (fetched from the solc release list if None)

        Returns:
            Newest release satisfying the constraint, e.g. "0.8.26"

        Raises:
            CompilerVersionError: If no release matches
            ProviderConnectionError: If the release list cannot be downloaded
        """
        if available is None:
            available = fetch_solc_releases()
        return resolve_compiler_version(available, self.compiler().version)

    def missing_variables(self, network: str) -> List[str]:
        """Required variables for a network that are unset or empty."""
        return [name for name in required_variables(network) if not self._env.get(name)]

    def validate(self, network: str) -> None:
        """
        Check that everything needed to deploy to a network is set.

        Raises:
            NetworkNotFoundError: If network is not configured
            MissingEnvironmentError: If required variables are missing
        """
        missing = self.missing_variables(network)
        if missing:
            logger.warning("Missing environment variables", network=network, missing=missing)
        require_environment(self._env, required_variables(network))

    def explorer_url(self, network: str, address: str) -> Optional[str]:
        """
        Block explorer URL for an address on a network.

        Returns:
            URL, or None if the network has no explorer
        """
        network_config = self.network(network)
        if network_config.block_explorer_url is None:
            return None
        return f"{network_config.block_explorer_url}/address/{address}"

    def to_dict(self) -> Dict[str, Any]:
        return self._config.to_dict()

    def write(self, output_path: Optional[Union[Path, str]] = None) -> str:
        """
        Write the configuration document as JSON.

        Args:
            output_path: Destination (defaults to ./deploy-config.json)

        Returns:
            Path the configuration was written to
        """
        if output_path is None:
            output_path = get_default_output_path()

        output_path_obj = Path(output_path)
        output_path_obj.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path_obj, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info("Deployment config written", path=str(output_path_obj))
        return str(output_path_obj)


def load_config(env_file: Optional[Union[Path, str]] = None) -> DeploymentConfig:
    """
    Load the deployment configuration from the environment.

    Args:
        env_file: Dotenv file (defaults to ./.env)

    Returns:
        DeploymentConfig
    """
    return DeploymentConfig(env_file=env_file)
