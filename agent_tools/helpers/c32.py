"""
c32check address encoding for Stacks.

Public API
----------
c32_address(version, hash160_bytes)
    Encode a version byte and 20-byte hash160 as an ``S``-prefixed address.
c32_address_decode(address)
    Inverse of ``c32_address``; verifies the checksum.
hash160(data)
    RIPEMD160(SHA256(data)).
sha512_256(data)
    SHA-512/256 digest used for Stacks txids and sighashes.
"""
from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160, SHA512

__all__ = [
    "C32_ALPHABET",
    "c32_encode",
    "c32_decode",
    "c32_address",
    "c32_address_decode",
    "is_valid_address",
    "hash160",
    "sha512_256",
]

# Crockford base32 variant
C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# Characters Crockford base32 folds onto canonical digits
_NORMALIZE = str.maketrans({"O": "0", "L": "1", "I": "1"})


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    sha = hashlib.sha256(data).digest()
    return RIPEMD160.new(sha).digest()


def sha512_256(data: bytes) -> bytes:
    return SHA512.new(data, truncate="256").digest()


def _checksum(version: int, data: bytes) -> bytes:
    payload = bytes([version]) + data
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]


def c32_encode(data: bytes) -> str:
    """Encode bytes as c32; every leading zero byte becomes one '0'."""
    num = int.from_bytes(data, "big")
    digits = []
    while num > 0:
        num, remainder = divmod(num, 32)
        digits.append(C32_ALPHABET[remainder])

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    digits.extend(C32_ALPHABET[0] * leading_zeros)
    return "".join(reversed(digits))


def c32_decode(text: str) -> bytes:
    """Decode a c32 string; every leading '0' becomes one zero byte."""
    text = text.upper().translate(_NORMALIZE)
    num = 0
    for ch in text:
        idx = C32_ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Invalid c32 character: {ch!r}")
        num = num * 32 + idx

    leading_zeros = len(text) - len(text.lstrip(C32_ALPHABET[0]))
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * leading_zeros + body


def c32_address(version: int, hash160_bytes: bytes) -> str:
    """
    Encode a Stacks address from version byte and hash160.

    Returns a c32check-encoded address string like 'SP...' or 'ST...'.
    """
    if not 0 <= version < 32:
        raise ValueError(f"Invalid address version: {version}")
    if len(hash160_bytes) != 20:
        raise ValueError(f"hash160 must be 20 bytes, got {len(hash160_bytes)}")
    checksum = _checksum(version, hash160_bytes)
    return "S" + C32_ALPHABET[version] + c32_encode(hash160_bytes + checksum)


def c32_address_decode(address: str) -> tuple[int, bytes]:
    """Decode a c32check address into (version, hash160_bytes)."""
    if not isinstance(address, str) or len(address) < 5 or address[0] != "S":
        raise ValueError(f"Invalid Stacks address: {address!r}")

    version = C32_ALPHABET.find(address[1].upper())
    if version < 0:
        raise ValueError(f"Invalid Stacks address version: {address!r}")

    decoded = c32_decode(address[2:])
    if len(decoded) < 4:
        raise ValueError(f"Invalid Stacks address (too short): {address}")

    data, checksum = decoded[:-4], decoded[-4:]
    # Leading zero bytes of the hash may have been folded into the integer
    data = data.rjust(20, b"\x00")
    if len(data) != 20:
        raise ValueError(f"Invalid Stacks address length: {address}")
    if checksum != _checksum(version, data):
        raise ValueError(f"Invalid Stacks address checksum: {address}")

    return version, data


def is_valid_address(address: str) -> bool:
    try:
        c32_address_decode(address)
    except ValueError:
        return False
    return True
