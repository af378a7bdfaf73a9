"""
Stacks contract-call transactions: intent, serialization and signing.

A ``ContractCallIntent`` describes the call (target, typed arguments, fee,
nonce, anchor and post-condition settings). ``make_contract_call`` signs it
with a single-sig P2PKH standard authorization and returns the wire-ready
``StacksTransaction``.

Signing follows the Stacks sighash chain::

    initial = txid(tx with nonce=0, fee=0, empty signature)
    presign = sha512_256(initial || auth_type || fee || nonce)
    signature = recoverable secp256k1 over presign, encoded recid || r || s
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

import coincurve

from agent_tools.config.network import get_network_config
from agent_tools.exceptions import ClarityError
from agent_tools.helpers.c32 import c32_address_decode, hash160, sha512_256
from agent_tools.helpers.clarity import serialize_cv
from agent_tools.helpers.post_conditions import serialize_post_condition

logger = logging.getLogger(__name__)

__all__ = [
    "AnchorMode",
    "PostConditionMode",
    "ContractCallIntent",
    "StacksTransaction",
    "make_contract_call",
    "serialize_unsigned",
    "recover_signer_public_key",
]

# --------------------------------------------------------------------------- #
# Constants                                                                   #
# --------------------------------------------------------------------------- #

AUTH_STANDARD = 0x04
HASH_MODE_P2PKH = 0x00
KEY_ENCODING_COMPRESSED = 0x00
PAYLOAD_CONTRACT_CALL = 0x02
EMPTY_SIGNATURE = b"\x00" * 65


class AnchorMode(IntEnum):
    ON_CHAIN_ONLY = 0x01
    OFF_CHAIN_ONLY = 0x02
    ANY = 0x03


class PostConditionMode(IntEnum):
    ALLOW = 0x01
    DENY = 0x02


# --------------------------------------------------------------------------- #
# Intent                                                                      #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class ContractCallIntent:
    """Everything needed to sign a contract call; immutable once built."""

    contract_address: str
    contract_name: str
    function_name: str
    function_args: tuple
    fee: int
    nonce: int
    network: str
    anchor_mode: AnchorMode = AnchorMode.ANY
    post_condition_mode: PostConditionMode = PostConditionMode.DENY
    post_conditions: tuple = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but keep the intent immutable
        object.__setattr__(self, "function_args", tuple(self.function_args))
        object.__setattr__(self, "post_conditions", tuple(self.post_conditions))
        if self.fee < 0:
            raise ValueError(f"fee must be non-negative, got {self.fee}")
        if self.nonce < 0:
            raise ValueError(f"nonce must be non-negative, got {self.nonce}")

    @property
    def contract_id(self) -> str:
        return f"{self.contract_address}.{self.contract_name}"


# --------------------------------------------------------------------------- #
# Serialization                                                               #
# --------------------------------------------------------------------------- #

def _lp_ascii(value: str) -> bytes:
    raw = value.encode("ascii")
    if not raw or len(raw) > 128:
        raise ClarityError(f"Invalid Clarity name: {value!r}")
    return struct.pack("B", len(raw)) + raw


def _serialize_payload(intent: ContractCallIntent) -> bytes:
    try:
        version, hash_bytes = c32_address_decode(intent.contract_address)
    except ValueError as exc:
        raise ClarityError(str(exc)) from exc

    payload = bytes([PAYLOAD_CONTRACT_CALL, version]) + hash_bytes
    payload += _lp_ascii(intent.contract_name)
    payload += _lp_ascii(intent.function_name)
    payload += struct.pack(">I", len(intent.function_args))
    for arg in intent.function_args:
        payload += serialize_cv(arg)
    return payload


def _serialize_auth(signer: bytes, nonce: int, fee: int, signature: bytes) -> bytes:
    return (
        bytes([AUTH_STANDARD, HASH_MODE_P2PKH])
        + signer
        + struct.pack(">QQ", nonce, fee)
        + bytes([KEY_ENCODING_COMPRESSED])
        + signature
    )


def _serialize(intent: ContractCallIntent, signer: bytes, nonce: int, fee: int, signature: bytes) -> bytes:
    network = get_network_config(intent.network)
    tx = struct.pack(">BI", network["transaction_version"], network["chain_id"])
    tx += _serialize_auth(signer, nonce, fee, signature)
    tx += bytes([intent.anchor_mode, intent.post_condition_mode])
    tx += struct.pack(">I", len(intent.post_conditions))
    for pc in intent.post_conditions:
        tx += serialize_post_condition(pc)
    tx += _serialize_payload(intent)
    return tx


def serialize_unsigned(intent: ContractCallIntent, public_key: bytes) -> bytes:
    """The transaction with its real nonce/fee and an empty signature."""
    return _serialize(intent, hash160(public_key), intent.nonce, intent.fee, EMPTY_SIGNATURE)


# --------------------------------------------------------------------------- #
# Signing                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class StacksTransaction:
    """A signed transaction ready for broadcast."""

    intent: ContractCallIntent
    raw: bytes = field(repr=False)

    def serialize(self) -> bytes:
        return self.raw

    def hex(self) -> str:
        return self.raw.hex()

    def txid(self) -> str:
        return sha512_256(self.raw).hex()


def _presign_hash(initial_sighash: bytes, fee: int, nonce: int) -> bytes:
    return sha512_256(initial_sighash + bytes([AUTH_STANDARD]) + struct.pack(">QQ", fee, nonce))


def _sign_recoverable(private_key: bytes, message_hash: bytes) -> bytes:
    sig = coincurve.PrivateKey(private_key).sign_recoverable(message_hash, hasher=None)
    # coincurve returns r(32) || s(32) || recovery_id(1); Stacks wants recovery_id first
    return bytes([sig[64]]) + sig[:64]


def _normalize_key(sender_key: bytes | str) -> bytes:
    if isinstance(sender_key, str):
        sender_key = bytes.fromhex(sender_key[2:] if sender_key.startswith("0x") else sender_key)
    if len(sender_key) == 33 and sender_key[-1] == 0x01:
        sender_key = sender_key[:32]
    if len(sender_key) != 32:
        raise ValueError("sender key must be 32 bytes (optionally with a 01 compression suffix)")
    return sender_key


def make_contract_call(intent: ContractCallIntent, sender_key: bytes | str) -> StacksTransaction:
    """Sign ``intent`` with ``sender_key`` and return the signed transaction."""
    private_key = _normalize_key(sender_key)
    public_key = coincurve.PrivateKey(private_key).public_key.format(compressed=True)
    signer = hash160(public_key)

    cleared = _serialize(intent, signer, 0, 0, EMPTY_SIGNATURE)
    initial_sighash = sha512_256(cleared)
    presign = _presign_hash(initial_sighash, intent.fee, intent.nonce)
    signature = _sign_recoverable(private_key, presign)

    raw = _serialize(intent, signer, intent.nonce, intent.fee, signature)
    tx = StacksTransaction(intent=intent, raw=raw)
    logger.debug(
        "Signed %s::%s nonce=%s fee=%s txid=%s",
        intent.contract_id, intent.function_name, intent.nonce, intent.fee, tx.txid(),
    )
    return tx


def recover_signer_public_key(tx: StacksTransaction) -> Optional[bytes]:
    """Recover the compressed public key that signed ``tx``."""
    raw = tx.raw
    # version(1) chain(4) auth_type(1) hash_mode(1) signer(20) nonce(8) fee(8) key_enc(1)
    sig_offset = 44
    signature = raw[sig_offset:sig_offset + 65]
    if signature == EMPTY_SIGNATURE:
        return None
    signer = raw[7:27]
    cleared = _serialize(tx.intent, signer, 0, 0, EMPTY_SIGNATURE)
    presign = _presign_hash(sha512_256(cleared), tx.intent.fee, tx.intent.nonce)
    recoverable = signature[1:] + signature[:1]
    public_key = coincurve.PublicKey.from_signature_and_message(recoverable, presign, hasher=None)
    return public_key.format(compressed=True)
