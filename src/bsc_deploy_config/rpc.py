"""JSON-RPC transport for bsc-deploy-config library."""

from typing import Any, List, Optional

import requests

from .exceptions import ProviderConnectionError, RpcError


def rpc_request(
    url: str, method: str, params: Optional[List[Any]] = None, timeout: int = 30
) -> Any:
    """
    Send a single JSON-RPC 2.0 request to a node.

    Args:
        url: RPC endpoint URL
        method: JSON-RPC method, e.g. "eth_chainId"
        params: Positional parameters (defaults to none)
        timeout: HTTP timeout in seconds

    Returns:
        The "result" member of the response

    Raises:
        RpcError: If the node returns an error object or no result
        ProviderConnectionError: If a network or HTTP error occurs
    """
    try:
        response = requests.post(
            url,
            json={
                "jsonrpc": "2.0",
                "method": method,
                "params": params or [],
                "id": 1,
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise ProviderConnectionError(f"Network error during RPC call: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise ProviderConnectionError(
            f"RPC request {method} failed with status {response.status_code}"
        )

    try:
        result = response.json()
    except ValueError as e:
        raise ProviderConnectionError(f"RPC request {method} returned a non-JSON body") from e

    # Check for RPC errors
    if "error" in result:
        raise RpcError(f"RPC error in {method}: {result['error']}")
    if "result" not in result:
        raise RpcError(f"RPC response to {method} has neither result nor error")

    return result["result"]
