"""
Tests for environment settings, network table, contracts and token math.
"""
import os
from decimal import Decimal

import pytest

from agent_tools.config.contracts import get_faucet_contract, get_jing_contract
from agent_tools.config.network import get_api_url, get_explorer_tx_url, get_http_timeout, get_network_config
from agent_tools.config.settings import Settings, load_env, require_env
from agent_tools.config.tokens import (
    calculate_ask_fees,
    display_value,
    get_token_info,
    normalize_price,
    price_per_token,
    split_pair,
    to_raw,
)
from agent_tools.exceptions import ConfigError
from tests.conftest import TEST_MNEMONIC


# ---------- settings ----------

def test_settings_from_env(mnemonic_env, monkeypatch):
    monkeypatch.setenv("ACCOUNT_INDEX", "3")
    settings = Settings.from_env()
    assert settings.network == "testnet"
    assert settings.mnemonic == TEST_MNEMONIC
    assert settings.account_index == 3


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("MNEMONIC", TEST_MNEMONIC)
    settings = Settings.from_env()
    assert settings.network == "testnet"
    assert settings.account_index == 0


def test_missing_mnemonic_names_variable():
    with pytest.raises(ConfigError, match="MNEMONIC environment variable is required"):
        Settings.from_env()


@pytest.mark.parametrize("network", ["regtest", "main"])
def test_invalid_network_rejected(mnemonic_env, monkeypatch, network):
    monkeypatch.setenv("NETWORK", network)
    with pytest.raises(ConfigError, match="NETWORK"):
        Settings.from_env()


@pytest.mark.parametrize("index", ["-1", "one"])
def test_invalid_account_index_rejected(mnemonic_env, monkeypatch, index):
    monkeypatch.setenv("ACCOUNT_INDEX", index)
    with pytest.raises(ConfigError, match="ACCOUNT_INDEX"):
        Settings.from_env()


def test_settings_repr_hides_mnemonic(settings):
    assert "abandon" not in repr(settings)


def test_require_env(monkeypatch):
    monkeypatch.setenv("RECEIVE_ADDRESS", "tb1qexample")
    assert require_env("RECEIVE_ADDRESS") == "tb1qexample"
    with pytest.raises(ConfigError, match="ORDINALSBOT_API_KEY"):
        require_env("ORDINALSBOT_API_KEY")


def test_load_env_file(tmp_path, monkeypatch):
    monkeypatch.setenv("NETWORK", "testnet")
    env_file = tmp_path / "tools.env"
    env_file.write_text("NETWORK=mainnet\n")
    load_env(str(env_file))
    assert os.environ["NETWORK"] == "mainnet"


def test_load_env_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_env(str(tmp_path / "missing.env"))


# ---------- network ----------

def test_network_config_and_api_override(monkeypatch):
    assert get_network_config("mainnet")["chain_id"] == 1
    assert get_api_url("testnet") == "https://api.testnet.hiro.so"
    monkeypatch.setenv("STACKS_API_URL", "http://localhost:3999/")
    assert get_api_url("testnet") == "http://localhost:3999"
    with pytest.raises(ValueError):
        get_network_config("regtest")


def test_explorer_url():
    assert get_explorer_tx_url("abc", "testnet") == "https://explorer.hiro.so/txid/0xabc?chain=testnet"


def test_http_timeout(monkeypatch):
    assert get_http_timeout() == 30
    monkeypatch.setenv("HTTP_TIMEOUT", "5")
    assert get_http_timeout() == 5


# ---------- contracts ----------

def test_jing_contract_override(monkeypatch):
    assert get_jing_contract("ask")[1] == "ft-stx-swap-v1"
    monkeypatch.setenv("JING_ASK_CONTRACT", "ST000.ask-v2")
    assert get_jing_contract("ASK") == ("ST000", "ask-v2")


def test_malformed_contract_override(monkeypatch):
    monkeypatch.setenv("FAUCET_CONTRACT", "no-dot-here")
    with pytest.raises(ConfigError, match="FAUCET_CONTRACT"):
        get_faucet_contract()


def test_unknown_jing_contract():
    with pytest.raises(ConfigError):
        get_jing_contract("NOPE")


# ---------- tokens ----------

@pytest.mark.parametrize("raw, decimals", [(0, 0), (1, 6), (123456789, 8), (10 ** 20, 18), (5, 0)])
def test_display_value_scales_back_exactly(raw, decimals):
    assert display_value(raw, decimals) * (Decimal(10) ** decimals) == raw
    assert to_raw(display_value(raw, decimals), decimals) == raw


def test_display_value_rejects_negative_decimals():
    with pytest.raises(ValueError):
        display_value(1, -1)


@pytest.mark.parametrize("price, src, dst", [
    (Decimal("0.1"), 6, 3),
    (Decimal("12.5"), 6, 8),
    (Decimal("7"), 0, 0),
])
def test_normalize_price_roundtrip(price, src, dst):
    assert normalize_price(normalize_price(price, src, dst), dst, src) == price


def test_normalize_price_scaling():
    assert normalize_price(Decimal("0.1"), 6, 3) == Decimal("0.0001")


def test_price_per_token():
    # 1 STX for 10 whole tokens of a 6-decimal token
    assert price_per_token(1_000_000, 10_000_000, 6) == Decimal("0.1")
    with pytest.raises(ValueError):
        price_per_token(1, 0, 6)


@pytest.mark.parametrize("amount, expected", [
    (0, 0),
    (1, 1),
    (399, 1),
    (400, 1),
    (401, 2),
    (10_000_000, 25_000),
])
def test_calculate_ask_fees(amount, expected):
    assert calculate_ask_fees(amount) == expected


def test_token_info():
    info = get_token_info("pepe-stx")
    assert info is not None
    assert info.asset_name == "tokensoft-token"
    assert get_token_info("UNKNOWN-STX") is None
    assert get_token_info("PEPE-BTC") is None
    assert get_token_info("PEPE") is None


def test_split_pair():
    assert split_pair("welsh-stx") == ("WELSH", "STX")
    with pytest.raises(ValueError):
        split_pair("WELSH")
