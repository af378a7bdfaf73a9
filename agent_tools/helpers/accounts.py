"""
Account derivation from a BIP-39 mnemonic.

Stacks keys live at ``m/44'/5757'/0'/0/<account_index>``; the address is the
c32check encoding of hash160(compressed public key) with the network's
single-sig version byte.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import coincurve
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError as EthValidationError

from agent_tools.config.network import get_address_version
from agent_tools.exceptions import ConfigError
from agent_tools.helpers.c32 import c32_address, hash160

__all__ = [
    "STX_DERIVATION_PATH",
    "StacksAccount",
    "derive_child_account",
    "derive_child_accounts",
    "address_from_public_key",
    "address_from_private_key",
]

STX_DERIVATION_PATH = "m/44'/5757'/0'/0"


@dataclass(frozen=True)
class StacksAccount:
    """Derived identity for one run. Never persisted."""

    address: str
    private_key: bytes = field(repr=False)
    public_key: bytes
    network: str
    account_index: int

    @property
    def derivation_path(self) -> str:
        return f"{STX_DERIVATION_PATH}/{self.account_index}"

    @property
    def private_key_hex(self) -> str:
        # Stacks convention: trailing 01 marks a compressed public key
        return self.private_key.hex() + "01"


def address_from_public_key(public_key: bytes, network: str) -> str:
    return c32_address(get_address_version(network), hash160(public_key))


def address_from_private_key(private_key: bytes, network: str) -> str:
    if len(private_key) == 33 and private_key[-1] == 0x01:
        private_key = private_key[:32]
    public_key = coincurve.PrivateKey(private_key).public_key.format(compressed=True)
    return address_from_public_key(public_key, network)


def _derive_private_key(mnemonic: str, path: str) -> bytes:
    # Enable HD wallet features (eth-account marks as unaudited)
    Account.enable_unaudited_hdwallet_features()
    try:
        acct: LocalAccount = Account.from_mnemonic(mnemonic, account_path=path)
    except (EthValidationError, ValueError) as exc:
        raise ConfigError(f"MNEMONIC is not a valid BIP-39 phrase: {exc}") from exc
    return bytes(acct.key)


def derive_child_account(network: str, mnemonic: str, account_index: int = 0) -> StacksAccount:
    """Derive the (address, key) pair for ``account_index``.

    Raises:
        ConfigError: if the mnemonic is not a valid BIP-39 phrase.
        ValueError: if the account index is negative.
    """
    if account_index < 0:
        raise ValueError(f"account index must be non-negative, got {account_index}")
    path = f"{STX_DERIVATION_PATH}/{account_index}"
    private_key = _derive_private_key(mnemonic, path)
    public_key = coincurve.PrivateKey(private_key).public_key.format(compressed=True)
    return StacksAccount(
        address=address_from_public_key(public_key, network),
        private_key=private_key,
        public_key=public_key,
        network=network,
        account_index=account_index,
    )


def derive_child_accounts(network: str, mnemonic: str, max_index: int) -> list[str]:
    """Addresses for account indices ``0..max_index`` inclusive."""
    return [
        derive_child_account(network, mnemonic, index).address
        for index in range(max_index + 1)
    ]
