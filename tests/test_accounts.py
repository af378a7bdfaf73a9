"""
Tests for mnemonic-based account derivation.
"""
import pytest

from agent_tools.exceptions import ConfigError
from agent_tools.helpers.accounts import (
    address_from_private_key,
    address_from_public_key,
    derive_child_account,
    derive_child_accounts,
)
from agent_tools.helpers.c32 import c32_address_decode, hash160, is_valid_address
from tests.conftest import TEST_MNEMONIC


def test_testnet_and_mainnet_prefixes(account):
    assert account.address.startswith("ST")
    mainnet = derive_child_account("mainnet", TEST_MNEMONIC, 0)
    assert mainnet.address.startswith("SP")
    # Same key, different version byte
    assert mainnet.private_key == account.private_key
    assert c32_address_decode(mainnet.address)[1] == c32_address_decode(account.address)[1]


def test_devnet_uses_testnet_version():
    devnet = derive_child_account("devnet", TEST_MNEMONIC, 0)
    assert devnet.address.startswith("ST")


def test_derivation_is_deterministic(account):
    again = derive_child_account("testnet", TEST_MNEMONIC, 0)
    assert again == account


def test_indices_give_distinct_accounts(account):
    second = derive_child_account("testnet", TEST_MNEMONIC, 1)
    assert second.address != account.address
    assert second.derivation_path == "m/44'/5757'/0'/0/1"


def test_address_matches_public_key_hash(account):
    assert is_valid_address(account.address)
    assert c32_address_decode(account.address) == (26, hash160(account.public_key))
    assert len(account.public_key) == 33
    assert address_from_public_key(account.public_key, "testnet") == account.address


def test_private_key_formats(account):
    assert len(account.private_key) == 32
    assert account.private_key_hex.endswith("01")
    assert len(account.private_key_hex) == 66
    assert address_from_private_key(account.private_key, "testnet") == account.address
    assert address_from_private_key(bytes.fromhex(account.private_key_hex), "testnet") == account.address


def test_private_key_hidden_from_repr(account):
    assert account.private_key.hex() not in repr(account)


def test_derive_child_accounts(account):
    addresses = derive_child_accounts("testnet", TEST_MNEMONIC, 9)
    assert len(addresses) == 10
    assert addresses[0] == account.address
    assert len(set(addresses)) == 10


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        derive_child_account("testnet", TEST_MNEMONIC, -1)


def test_invalid_mnemonic_rejected():
    with pytest.raises(ConfigError, match="MNEMONIC"):
        derive_child_account("testnet", "abandon abandon abandon", 0)
