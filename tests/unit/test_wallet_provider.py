"""Unit tests for the HD wallet provider."""

import json
from typing import Any, Callable, Dict, List

import pytest
import responses

from bsc_deploy_config.exceptions import MissingEnvironmentError, ProviderConnectionError
from bsc_deploy_config.providers import HDWalletProvider


def _rpc_callback(results: Dict[str, Any], calls: List[str]) -> Callable:
    """Build a responses callback answering by JSON-RPC method."""

    def callback(request):
        payload = json.loads(request.body)
        method = payload["method"]
        calls.append(method)
        result = results[method]
        if callable(result):
            result = result(payload["params"])
        return (200, {}, json.dumps({"jsonrpc": "2.0", "id": 1, "result": result}))

    return callback


class TestAccountDerivation:
    """Test mnemonic account derivation."""

    def test_derives_first_address(self, test_mnemonic, test_addresses, rpc_url):
        """Test that index 0 matches the BIP-44 reference address."""
        provider = HDWalletProvider(test_mnemonic, rpc_url)

        assert provider.addresses == [test_addresses[0]]
        assert provider.get_address() == test_addresses[0]

    def test_derives_multiple_addresses(self, test_mnemonic, test_addresses, rpc_url):
        provider = HDWalletProvider(test_mnemonic, rpc_url, num_addresses=3)

        assert provider.addresses == test_addresses

    def test_address_index_offset(self, test_mnemonic, test_addresses, rpc_url):
        provider = HDWalletProvider(test_mnemonic, rpc_url, address_index=1, num_addresses=2)

        assert provider.addresses == test_addresses[1:3]

    @pytest.mark.parametrize("mnemonic", [None, ""])
    def test_missing_mnemonic_raises(self, mnemonic, rpc_url):
        """Test that an unset mnemonic surfaces when the provider is built."""
        with pytest.raises(MissingEnvironmentError, match="MNEMONIC"):
            HDWalletProvider(mnemonic, rpc_url)

    def test_zero_addresses_raises(self, test_mnemonic, rpc_url):
        with pytest.raises(ValueError):
            HDWalletProvider(test_mnemonic, rpc_url, num_addresses=0)

    def test_repr_hides_mnemonic(self, test_mnemonic, rpc_url):
        assert test_mnemonic not in repr(HDWalletProvider(test_mnemonic, rpc_url))


class TestNodeQueries:
    """Test simple JSON-RPC helpers."""

    @responses.activate
    def test_chain_id(self, test_mnemonic, rpc_url):
        calls: List[str] = []
        responses.add_callback(
            responses.POST, rpc_url, callback=_rpc_callback({"eth_chainId": "0x61"}, calls)
        )

        assert HDWalletProvider(test_mnemonic, rpc_url).chain_id() == 97

    @responses.activate
    def test_block_number(self, test_mnemonic, rpc_url):
        calls: List[str] = []
        responses.add_callback(
            responses.POST, rpc_url, callback=_rpc_callback({"eth_blockNumber": "0x10"}, calls)
        )

        assert HDWalletProvider(test_mnemonic, rpc_url).block_number() == 16

    @responses.activate
    def test_balance_defaults_to_first_address(self, test_mnemonic, test_addresses, rpc_url):
        seen: List[Any] = []

        def balance(params):
            seen.append(params)
            return "0xde0b6b3a7640000"

        calls: List[str] = []
        responses.add_callback(
            responses.POST, rpc_url, callback=_rpc_callback({"eth_getBalance": balance}, calls)
        )

        assert HDWalletProvider(test_mnemonic, rpc_url).get_balance() == 10**18
        assert seen == [[test_addresses[0], "latest"]]


class TestSendTransaction:
    """Test signing and submitting transactions."""

    @responses.activate
    def test_complete_transaction_sent_raw(self, test_mnemonic, test_addresses, rpc_url):
        """Test that a fully specified transaction needs only one RPC call."""
        raw_payloads: List[Any] = []

        def send_raw(params):
            raw_payloads.append(params)
            return "0x" + "ab" * 32

        calls: List[str] = []
        responses.add_callback(
            responses.POST,
            rpc_url,
            callback=_rpc_callback({"eth_sendRawTransaction": send_raw}, calls),
        )

        provider = HDWalletProvider(test_mnemonic, rpc_url)
        tx_hash = provider.send_transaction(
            {
                "to": test_addresses[1],
                "value": 1,
                "nonce": 0,
                "gas": 21000,
                "gasPrice": "0x64",
                "chainId": 97,
            }
        )

        assert tx_hash == "0x" + "ab" * 32
        assert calls == ["eth_sendRawTransaction"]
        assert raw_payloads[0][0].startswith("0x")

    @responses.activate
    def test_missing_fields_fetched_from_node(self, test_mnemonic, test_addresses, rpc_url):
        """Test that nonce, gas price, chain ID and gas are filled in."""
        calls: List[str] = []
        responses.add_callback(
            responses.POST,
            rpc_url,
            callback=_rpc_callback(
                {
                    "eth_getTransactionCount": "0x5",
                    "eth_gasPrice": "0x2540be400",
                    "eth_chainId": "0x61",
                    "eth_estimateGas": "0x5208",
                    "eth_sendRawTransaction": "0x" + "cd" * 32,
                },
                calls,
            ),
        )

        provider = HDWalletProvider(test_mnemonic, rpc_url)
        tx_hash = provider.send_transaction({"to": test_addresses[1], "value": 1})

        assert tx_hash == "0x" + "cd" * 32
        assert calls == [
            "eth_getTransactionCount",
            "eth_gasPrice",
            "eth_chainId",
            "eth_estimateGas",
            "eth_sendRawTransaction",
        ]

    def test_unknown_sender_raises(self, test_mnemonic, test_addresses, rpc_url):
        provider = HDWalletProvider(test_mnemonic, rpc_url)

        with pytest.raises(ValueError, match="not managed"):
            provider.send_transaction({"from": test_addresses[2], "to": test_addresses[1]})


class TestWaitForReceipt:
    """Test polling for transaction receipts."""

    @responses.activate
    def test_returns_confirmed_receipt(self, test_mnemonic, rpc_url):
        """Test that the receipt is returned once enough blocks are on top."""
        blocks = iter(["0x64", "0x64", "0x65", "0x66"])
        receipts = iter([None, {"blockNumber": "0x64", "status": "0x1"}, {"blockNumber": "0x64", "status": "0x1"}])

        calls: List[str] = []
        responses.add_callback(
            responses.POST,
            rpc_url,
            callback=_rpc_callback(
                {
                    "eth_blockNumber": lambda params: next(blocks),
                    "eth_getTransactionReceipt": lambda params: next(receipts),
                },
                calls,
            ),
        )

        provider = HDWalletProvider(test_mnemonic, rpc_url)
        receipt = provider.wait_for_receipt("0x01", confirmations=1, poll_interval=0)

        assert receipt["status"] == "0x1"

    @responses.activate
    def test_times_out_after_blocks(self, test_mnemonic, rpc_url):
        """Test that a never-mined transaction raises after timeout_blocks."""
        counter = {"block": 100}

        def block_number(params):
            counter["block"] += 1
            return hex(counter["block"])

        calls: List[str] = []
        responses.add_callback(
            responses.POST,
            rpc_url,
            callback=_rpc_callback(
                {
                    "eth_blockNumber": block_number,
                    "eth_getTransactionReceipt": None,
                },
                calls,
            ),
        )

        provider = HDWalletProvider(test_mnemonic, rpc_url)
        with pytest.raises(ProviderConnectionError, match="not mined"):
            provider.wait_for_receipt("0x01", timeout_blocks=3, poll_interval=0)

    @responses.activate
    def test_reorged_receipt_restarts_timeout(self, test_mnemonic, rpc_url):
        """Test that a receipt dropped by a reorg does not count toward the mining timeout."""
        blocks = iter(["0x64", "0x65", "0x66", "0x67", "0x68", "0x69"])
        mined = {"status": "0x1", "blockNumber": "0x68"}
        receipts = iter([{"blockNumber": "0x65", "status": "0x1"}, None, None, mined, mined])

        calls: List[str] = []
        responses.add_callback(
            responses.POST,
            rpc_url,
            callback=_rpc_callback(
                {
                    "eth_blockNumber": lambda params: next(blocks),
                    "eth_getTransactionReceipt": lambda params: next(receipts),
                },
                calls,
            ),
        )

        provider = HDWalletProvider(test_mnemonic, rpc_url)
        receipt = provider.wait_for_receipt(
            "0x01", confirmations=1, timeout_blocks=2, poll_interval=0
        )

        assert receipt["blockNumber"] == "0x68"
