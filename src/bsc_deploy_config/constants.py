"""Configuration constants for bsc-deploy-config library."""

# BSC public seed nodes
TESTNET_ENDPOINT = "https://data-seed-prebsc-1-s1.binance.org:8545"
MAINNET_ENDPOINT = "https://bsc-dataseed1.binance.org"

# Environment variables read by the config loader
MNEMONIC_ENV = "MNEMONIC"
MINTER_ADDRESS_ENV = "MINTER_ADDRESS"
MINTER_ADDRESS_LOCALHOST_ENV = "MINTER_ADDRESS_LOCALHOST"
BSCSCAN_API_KEY_ENV = "BSCSCAN_API_KEY"

ENV_VARS = [
    MNEMONIC_ENV,
    MINTER_ADDRESS_ENV,
    MINTER_ADDRESS_LOCALHOST_ENV,
    BSCSCAN_API_KEY_ENV,
]

# Network definitions keyed by the name the migration framework uses
# Networks with an "endpoint" are reached through an HD wallet provider
NETWORK_CONFIG = {
    "development": {
        "host": "127.0.0.1",
        "port": 7545,
        "network_id": "*",  # Any network
        "gas_price": "0x64",
        "from_env": MINTER_ADDRESS_LOCALHOST_ENV,
    },
    "bscTestnet": {
        "endpoint": "testnet",
        "network_id": 97,
        "chain_name": "BNB Smart Chain Testnet",
        "block_explorer_url": "https://testnet.bscscan.com",
        "confirmations": 10,
        "timeout_blocks": 200,
        "skip_dry_run": True,
        "from_env": MINTER_ADDRESS_ENV,
    },
    "bsc": {
        "endpoint": "mainnet",
        "network_id": 56,
        "chain_name": "BNB Smart Chain Mainnet",
        "block_explorer_url": "https://bscscan.com",
        "confirmations": 10,
        "timeout_blocks": 200,
        "skip_dry_run": True,
        "from_env": MINTER_ADDRESS_ENV,
    },
}

# Block explorer verification services -> API key variable
API_KEY_CONFIG = {
    "bscscan": BSCSCAN_API_KEY_ENV,
}

CONTRACTS_DIRECTORY = "./contracts/"
CONTRACTS_BUILD_DIRECTORY = "./abis/"

SOLC_VERSION = "^0.8.0"
OPTIMIZER_ENABLED = True
OPTIMIZER_RUNS = 200

PLUGINS = [
    "truffle-contract-size",
    "truffle-plugin-verify",
]

# BIP-44 Ethereum path, address index is appended
DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/"

SOLC_RELEASES_URL = "https://binaries.soliditylang.org/bin/list.json"
