"""Shared pytest fixtures for bsc-deploy-config tests."""

import os
from pathlib import Path
from typing import Dict, Iterator, Optional

import pytest

from bsc_deploy_config.constants import ENV_VARS

# Well-known development mnemonic (hardhat/anvil default accounts)
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_ADDRESSES = [
    "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
]


@pytest.fixture
def test_mnemonic() -> str:
    """Return the development mnemonic."""
    return TEST_MNEMONIC


@pytest.fixture
def sample_env() -> Dict[str, Optional[str]]:
    """Return a fully populated environment mapping."""
    return {
        "MNEMONIC": TEST_MNEMONIC,
        "MINTER_ADDRESS": TEST_ADDRESSES[0],
        "MINTER_ADDRESS_LOCALHOST": TEST_ADDRESSES[1],
        "BSCSCAN_API_KEY": "TESTAPIKEY123",
    }


@pytest.fixture
def empty_env() -> Dict[str, Optional[str]]:
    """Return an environment mapping with nothing set."""
    return {name: None for name in ENV_VARS}


@pytest.fixture
def clean_environ() -> Iterator[None]:
    """Remove known variables from the process environment, restoring them afterwards."""
    saved = {name: os.environ.pop(name) for name in ENV_VARS if name in os.environ}
    yield
    for name in ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Create a dotenv file with sample values."""
    path = tmp_path / ".env"
    path.write_text(
        f'MNEMONIC="{TEST_MNEMONIC}"\n'
        f"MINTER_ADDRESS={TEST_ADDRESSES[0]}\n"
        f"MINTER_ADDRESS_LOCALHOST={TEST_ADDRESSES[1]}\n"
        "BSCSCAN_API_KEY=FROMDOTENV\n"
    )
    return path


@pytest.fixture
def rpc_url() -> str:
    """Return a fake RPC endpoint URL."""
    return "http://test-rpc.example.com"


@pytest.fixture
def test_addresses() -> list:
    """Return the first addresses derived from the development mnemonic."""
    return list(TEST_ADDRESSES)
