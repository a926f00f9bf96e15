"""Endpoint selection and mnemonic-backed wallet provider."""

import time
from typing import Any, Dict, List, Optional

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address, to_hex

from .constants import DEFAULT_DERIVATION_PATH, MAINNET_ENDPOINT, MNEMONIC_ENV, TESTNET_ENDPOINT
from .exceptions import MissingEnvironmentError, ProviderConnectionError
from .rpc import rpc_request

logger = structlog.get_logger()

# Mnemonic derivation is gated behind this flag in eth-account
Account.enable_unaudited_hdwallet_features()

# Transaction fields eth-account expects as integers
_INT_FIELDS = ("nonce", "gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas", "value", "chainId")


def bsc_endpoint(network_name: str) -> str:
    """
    Choose the BSC seed node for a network name.

    Args:
        network_name: "testnet" for the testnet node, anything else for mainnet

    Returns:
        RPC endpoint URL
    """
    return TESTNET_ENDPOINT if network_name == "testnet" else MAINNET_ENDPOINT


def _to_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value)


class HDWalletProvider:
    """Signs transactions locally with mnemonic-derived keys and relays them to a node."""

    def __init__(
        self,
        mnemonic: Optional[str],
        endpoint: str,
        address_index: int = 0,
        num_addresses: int = 1,
        derivation_path: str = DEFAULT_DERIVATION_PATH,
        timeout: int = 30,
    ):
        """
        Derive accounts and bind them to an endpoint.

        Args:
            mnemonic: BIP-39 seed phrase
            endpoint: RPC endpoint URL
            address_index: First address index to derive
            num_addresses: How many consecutive addresses to derive
            derivation_path: Path prefix, the index is appended
            timeout: HTTP timeout in seconds for RPC calls

        Raises:
            MissingEnvironmentError: If mnemonic is empty
            ValueError: If num_addresses is less than 1
        """
        if not mnemonic:
            raise MissingEnvironmentError(
                f"Mnemonic required to build a wallet provider for {endpoint}: "
                f"set ${MNEMONIC_ENV}"
            )
        if num_addresses < 1:
            raise ValueError("num_addresses must be at least 1")

        self.endpoint = endpoint
        self.timeout = timeout

        self._accounts: Dict[str, LocalAccount] = {}
        for index in range(address_index, address_index + num_addresses):
            account = Account.from_mnemonic(
                mnemonic, account_path=f"{derivation_path}{index}"
            )
            self._accounts[account.address] = account

        logger.debug(
            "Wallet provider created",
            endpoint=endpoint,
            addresses=self.addresses,
        )

    def __repr__(self) -> str:
        return f"HDWalletProvider(endpoint={self.endpoint!r}, addresses={self.addresses!r})"

    @property
    def addresses(self) -> List[str]:
        """Checksummed derived addresses in derivation order."""
        return list(self._accounts)

    def get_address(self, index: int = 0) -> str:
        return self.addresses[index]

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Forward a JSON-RPC call to the endpoint."""
        return rpc_request(self.endpoint, method, params, timeout=self.timeout)

    def chain_id(self) -> int:
        return int(self.request("eth_chainId"), 16)

    def block_number(self) -> int:
        return int(self.request("eth_blockNumber"), 16)

    def get_balance(self, address: Optional[str] = None) -> int:
        """Balance in wei of an address (defaults to the first derived one)."""
        if address is None:
            address = self.get_address()
        return int(self.request("eth_getBalance", [address, "latest"]), 16)

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """
        Sign a transaction with a derived key and submit it.

        Missing nonce, gas price, chain ID and gas limit are fetched from the node.

        Args:
            tx: Transaction fields; "from" selects the signing account
                (defaults to the first derived address)

        Returns:
            Transaction hash

        Raises:
            ValueError: If "from" is not one of the derived addresses
            RpcError: If the node rejects the transaction
        """
        tx = dict(tx)
        sender = to_checksum_address(tx.pop("from", None) or self.get_address())
        if sender not in self._accounts:
            raise ValueError(f"Address {sender} is not managed by this provider")

        if "nonce" not in tx:
            tx["nonce"] = self.request("eth_getTransactionCount", [sender, "pending"])
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = self.request("eth_gasPrice")
        if "chainId" not in tx:
            tx["chainId"] = self.chain_id()
        if "gas" not in tx:
            estimate: Dict[str, Any] = {"from": sender}
            for key in ("to", "data"):
                if key in tx:
                    estimate[key] = tx[key]
            if "value" in tx:
                estimate["value"] = hex(_to_int(tx["value"]))
            tx["gas"] = self.request("eth_estimateGas", [estimate])

        for key in _INT_FIELDS:
            if key in tx:
                tx[key] = _to_int(tx[key])

        signed = self._accounts[sender].sign_transaction(tx)
        tx_hash = self.request("eth_sendRawTransaction", [to_hex(signed.raw_transaction)])

        logger.info("Transaction sent", endpoint=self.endpoint, sender=sender, tx_hash=tx_hash)
        return tx_hash

    def wait_for_receipt(
        self,
        tx_hash: str,
        confirmations: int = 0,
        timeout_blocks: int = 50,
        poll_interval: float = 1.0,
    ) -> Dict[str, Any]:
        """
        Poll until a transaction is mined and sufficiently confirmed.

        Args:
            tx_hash: Transaction hash
            confirmations: Blocks required on top of the mining block
            timeout_blocks: Blocks to wait for the transaction to be mined
            poll_interval: Seconds between polls

        Returns:
            Transaction receipt

        Raises:
            ProviderConnectionError: If not mined within timeout_blocks
        """
        log = logger.bind(tx_hash=tx_hash, confirmations=confirmations)
        start_block = self.block_number()
        seen = False

        while True:
            receipt = self.request("eth_getTransactionReceipt", [tx_hash])
            current_block = self.block_number()

            if receipt is not None:
                seen = True
                mined_block = int(receipt["blockNumber"], 16)
                if current_block - mined_block >= confirmations:
                    log.info("Transaction confirmed", block=mined_block)
                    return receipt
            elif seen:
                # Receipt dropped by a reorg, restart the mining timeout
                seen = False
                start_block = current_block
            elif current_block - start_block >= timeout_blocks:
                raise ProviderConnectionError(
                    f"Transaction {tx_hash} was not mined within {timeout_blocks} blocks"
                )

            time.sleep(poll_interval)


def get_bsc_wallet_provider(network_name: str, mnemonic: Optional[str]) -> HDWalletProvider:
    """
    Build a wallet provider for BSC testnet or mainnet.

    Args:
        network_name: "testnet" or "mainnet"
        mnemonic: BIP-39 seed phrase

    Returns:
        HDWalletProvider bound to the selected seed node
    """
    return HDWalletProvider(mnemonic, bsc_endpoint(network_name))
