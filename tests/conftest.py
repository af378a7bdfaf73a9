"""
Pytest fixtures for the agent-tools tests.
"""
import pytest

from agent_tools.config.settings import Settings
from agent_tools.config.tokens import TOKEN_CONFIG
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.c32 import c32_address
from agent_tools.helpers.stacks_api import StacksApiClient

# Standard BIP-39 test vector phrase
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
TEST_API_URL = "https://stacks.test"

# Addresses built locally so their checksums are always valid
DEPLOYER = c32_address(22, bytes(range(1, 21)))
TOKEN_DEPLOYER = c32_address(22, bytes(range(21, 41)))
OTHER_ADDRESS = c32_address(26, bytes([0xAB] * 20))

ENV_VARS = [
    "NETWORK", "MNEMONIC", "ACCOUNT_INDEX", "STACKS_API_URL", "HTTP_TIMEOUT",
    "ORDINALSBOT_API_KEY", "RECEIVE_ADDRESS", "JING_API_URL", "JING_API_KEY",
    "JING_ASK_CONTRACT", "JING_YANG_CONTRACT", "JING_BID_CONTRACT", "JING_YIN_CONTRACT",
    "FAUCET_CONTRACT", "LOG_LEVEL", "LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Every test starts from an environment with none of our variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mnemonic_env(monkeypatch):
    monkeypatch.setenv("NETWORK", "testnet")
    monkeypatch.setenv("MNEMONIC", TEST_MNEMONIC)
    monkeypatch.setenv("ACCOUNT_INDEX", "0")


@pytest.fixture
def settings():
    return Settings(network="testnet", mnemonic=TEST_MNEMONIC, account_index=0)


@pytest.fixture(scope="session")
def account():
    return derive_child_account("testnet", TEST_MNEMONIC, 0)


@pytest.fixture
def client():
    return StacksApiClient("testnet", api_url=TEST_API_URL, timeout=5)


@pytest.fixture
def jing_env(monkeypatch):
    """Point the Jing contracts and the PEPE token at locally built addresses."""
    monkeypatch.setenv("JING_ASK_CONTRACT", f"{DEPLOYER}.ft-stx-swap-v1")
    monkeypatch.setenv("JING_YANG_CONTRACT", f"{DEPLOYER}.yang")
    monkeypatch.setitem(TOKEN_CONFIG, "PEPE", {
        "name": "Pepe",
        "contract_address": TOKEN_DEPLOYER,
        "contract_name": "pepe-token",
        "asset_name": "pepe",
    })
