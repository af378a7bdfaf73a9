"""
Network configuration for the Stacks agent tools.

Contains API URLs, explorer links and the wire constants (transaction
version, chain id, address version) for each supported Stacks network.
"""

import os
from typing import Any


# =============================================================================
# NETWORK CONFIGURATIONS
# =============================================================================

NETWORKS: dict[str, dict[str, Any]] = {
    "mainnet": {
        "name": "Stacks Mainnet",
        "currency": "STX",
        "api_url": "https://api.hiro.so",
        "explorer": {
            "name": "Hiro Explorer",
            "url": "https://explorer.hiro.so",
            "chain_param": "mainnet",
        },
        "transaction_version": 0x00,
        "chain_id": 0x00000001,
        "address_version": 22,  # 'SP'
    },
    "testnet": {
        "name": "Stacks Testnet",
        "currency": "STX",
        "api_url": "https://api.testnet.hiro.so",
        "explorer": {
            "name": "Hiro Explorer",
            "url": "https://explorer.hiro.so",
            "chain_param": "testnet",
        },
        "transaction_version": 0x80,
        "chain_id": 0x80000000,
        "address_version": 26,  # 'ST'
    },
    "devnet": {
        "name": "Stacks Devnet",
        "currency": "STX",
        "api_url": "http://localhost:3999",
        "explorer": {
            "name": "Local Explorer",
            "url": "http://localhost:8000",
            "chain_param": "testnet",
        },
        "transaction_version": 0x80,
        "chain_id": 0x80000000,
        "address_version": 26,
    },
}

SUPPORTED_NETWORKS: tuple[str, ...] = tuple(NETWORKS)

# 1 STX = 1,000,000 uSTX
STX_DECIMALS: int = 6
MICRO_STX_PER_STX: int = 10 ** STX_DECIMALS

# Network timeout in seconds
HTTP_TIMEOUT: int = 30


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_network_config(network: str | None = None) -> dict[str, Any]:
    """Get configuration for a specific network.

    Args:
        network: Network name ('mainnet', 'testnet' or 'devnet').
                 If None, uses the NETWORK environment variable or 'testnet'.

    Returns:
        Network configuration dictionary.

    Raises:
        ValueError: If the network is not supported.
    """
    if network is None:
        network = os.getenv("NETWORK", "testnet")

    network = network.strip().lower()
    if network not in NETWORKS:
        raise ValueError(f"Unsupported network: {network}. Supported: {list(SUPPORTED_NETWORKS)}")

    return NETWORKS[network]


def get_api_url(network: str | None = None) -> str:
    """Get the Stacks API base URL for a network.

    Uses STACKS_API_URL environment variable if set, otherwise the default.
    """
    env_url = os.getenv("STACKS_API_URL")
    if env_url:
        return env_url.rstrip("/")

    config = get_network_config(network)
    return config["api_url"]


def get_address_version(network: str | None = None) -> int:
    """Get the single-sig address version byte for a network."""
    return get_network_config(network)["address_version"]


def get_explorer_tx_url(txid: str, network: str | None = None) -> str:
    """Get the block explorer link for a transaction id."""
    config = get_network_config(network)
    explorer = config["explorer"]
    if not txid.startswith("0x"):
        txid = "0x" + txid
    return f"{explorer['url']}/txid/{txid}?chain={explorer['chain_param']}"


def get_http_timeout() -> int:
    """HTTP timeout in seconds, overridable with HTTP_TIMEOUT."""
    value = os.getenv("HTTP_TIMEOUT")
    if not value:
        return HTTP_TIMEOUT
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"HTTP_TIMEOUT must be an integer, got {value!r}")
