"""
Contract identifiers used by the scripts.

Each entry can be overridden with an ``ADDRESS.contract-name`` environment
variable so the same scripts run against testnet/devnet deployments.
"""

import os

from agent_tools.exceptions import ConfigError

# Jing order-book contracts (ask side and the YIN/YANG fee vaults)
JING_DEPLOYER = "SP2BE8TZATXEVPGZ8HAFZYE5GKZ02X0YDKAN7ZTGW"

JING_CONTRACTS: dict[str, dict[str, str]] = {
    "BID": {"address": JING_DEPLOYER, "name": "stx-ft-swap-v1", "env": "JING_BID_CONTRACT"},
    "ASK": {"address": JING_DEPLOYER, "name": "ft-stx-swap-v1", "env": "JING_ASK_CONTRACT"},
    "YIN": {"address": JING_DEPLOYER, "name": "yin", "env": "JING_YIN_CONTRACT"},
    "YANG": {"address": JING_DEPLOYER, "name": "yang", "env": "JING_YANG_CONTRACT"},
}

# aiBTC faucet token (testnet)
FAUCET_CONTRACT = {
    "address": "STKYNF473GQ1V0WWCF24TV7ZR1WYAKTC79V25E3P",
    "name": "aibtcdev-aibtc",
    "env": "FAUCET_CONTRACT",
}

# Jing order-book API defaults
JING_API_URL = "https://backend-neon-ecru.vercel.app/api"
JING_API_KEY = "dev-api-token"


def _split(value: str, env_name: str) -> tuple[str, str]:
    parts = value.split(".")
    if len(parts) != 2 or not all(parts):
        raise ConfigError(f"{env_name} must be ADDRESS.contract-name, got {value!r}")
    return parts[0], parts[1]


def resolve_contract(entry: dict[str, str]) -> tuple[str, str]:
    """(address, name) for a contract entry, honoring its env override."""
    override = os.getenv(entry["env"])
    if override:
        return _split(override, entry["env"])
    return entry["address"], entry["name"]


def get_jing_contract(key: str) -> tuple[str, str]:
    try:
        entry = JING_CONTRACTS[key.upper()]
    except KeyError:
        raise ConfigError(f"Unknown Jing contract: {key}")
    return resolve_contract(entry)


def get_faucet_contract() -> tuple[str, str]:
    return resolve_contract(FAUCET_CONTRACT)
