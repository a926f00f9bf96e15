"""Data types and dataclasses for bsc-deploy-config library."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

if TYPE_CHECKING:
    from .providers import HDWalletProvider


@dataclass
class NetworkConfig:
    """Deployment target as seen by the migration framework."""

    # Required fields
    name: str  # e.g., "bscTestnet"
    network_id: Union[int, str]  # Chain ID, or "*" for any
    from_address: Optional[str]  # Sender, None when the env var is unset

    # Direct connection (local node)
    host: Optional[str] = None
    port: Optional[int] = None
    gas_price: Optional[str] = None  # Hex wei, e.g. "0x64"

    # Wallet-provider connection (remote node)
    endpoint: Optional[str] = None
    provider: Optional[Callable[[], "HDWalletProvider"]] = field(
        default=None, repr=False, compare=False
    )
    confirmations: Optional[int] = None
    timeout_blocks: Optional[int] = None
    skip_dry_run: Optional[bool] = None

    # Explorer metadata
    chain_name: Optional[str] = None
    block_explorer_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the migration framework's key names."""
        result: Dict[str, Any] = {}

        if self.host is not None:
            result["host"] = self.host
        if self.port is not None:
            result["port"] = self.port
        if self.endpoint is not None:
            result["provider"] = {"type": "hdwallet", "endpoint": self.endpoint}

        result["network_id"] = self.network_id
        result["from"] = self.from_address

        # Optional fields, framework name -> attribute
        for key, value in [
            ("gasPrice", self.gas_price),
            ("confirmations", self.confirmations),
            ("timeoutBlocks", self.timeout_blocks),
            ("skipDryRun", self.skip_dry_run),
        ]:
            if value is not None:
                result[key] = value

        return result


@dataclass
class OptimizerSettings:
    """Solidity optimizer options."""

    enabled: bool
    runs: int


@dataclass
class CompilerSettings:
    """Solidity compiler options."""

    version: str  # Semver constraint, e.g. "^0.8.0"
    optimizer: OptimizerSettings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimizer": {
                "enabled": self.optimizer.enabled,
                "runs": self.optimizer.runs,
            },
            "version": self.version,
        }


@dataclass
class ProjectConfig:
    """Complete deployment configuration for a contract project."""

    api_keys: Dict[str, Optional[str]]
    networks: Dict[str, NetworkConfig]
    contracts_directory: str
    contracts_build_directory: str
    compilers: Dict[str, CompilerSettings]
    plugins: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the structure the migration framework reads.

        Provider factories cannot be serialized; wallet-backed networks are
        emitted with their endpoint instead.
        """
        return {
            "api_keys": dict(self.api_keys),
            "networks": {
                name: network.to_dict() for name, network in self.networks.items()
            },
            "contracts_directory": self.contracts_directory,
            "contracts_build_directory": self.contracts_build_directory,
            "compilers": {
                name: compiler.to_dict() for name, compiler in self.compilers.items()
            },
            "plugins": list(self.plugins),
        }
