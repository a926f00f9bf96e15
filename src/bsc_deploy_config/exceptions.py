"""Custom exception classes for bsc-deploy-config library."""


class DeployConfigError(Exception):
    """Base exception for deployment configuration errors."""

    pass


class NetworkNotFoundError(DeployConfigError, ValueError):
    """Raised when requested network is not configured."""

    pass


class MissingEnvironmentError(DeployConfigError, LookupError):
    """Raised when a required environment variable is unset or empty."""

    pass


class CompilerVersionError(DeployConfigError, ValueError):
    """Raised when a compiler version constraint is malformed or unsatisfiable."""

    pass


class RpcError(DeployConfigError, ValueError):
    """Raised when the JSON-RPC node returns an error object."""

    pass


class ProviderConnectionError(DeployConfigError, RuntimeError):
    """Raised when the node cannot be reached or does not answer in time."""

    pass


class CompilerNotFoundError(DeployConfigError, LookupError):
    """Raised when requested compiler is not configured."""

    pass
