"""
Tests for c32check address encoding.
"""
import pytest

from agent_tools.helpers.c32 import (
    c32_address,
    c32_address_decode,
    c32_decode,
    c32_encode,
    hash160,
    is_valid_address,
    sha512_256,
)

HASH = bytes.fromhex("a46ff88886c2ef9762d970b4d2c63678835bd39d")


def test_known_mainnet_address():
    assert c32_address(22, HASH) == "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"


@pytest.mark.parametrize("version, prefix", [(22, "SP"), (26, "ST"), (20, "SM"), (21, "SN")])
def test_address_roundtrip(version, prefix):
    address = c32_address(version, HASH)
    assert address.startswith(prefix)
    assert c32_address_decode(address) == (version, HASH)


def test_leading_zero_bytes_survive_roundtrip():
    data = b"\x00\x00" + bytes(range(1, 19))
    address = c32_address(26, data)
    assert c32_address_decode(address) == (26, data)


def test_all_zero_hash_roundtrip():
    address = c32_address(22, bytes(20))
    assert c32_address_decode(address) == (22, bytes(20))


def test_c32_encode_leading_zeros():
    assert c32_encode(b"\x00\x01") == "01"
    assert c32_decode("01") == b"\x00\x01"
    assert c32_encode(b"") == ""


def test_decode_normalizes_ambiguous_characters():
    assert c32_decode("O1") == c32_decode("01")
    assert c32_decode("L") == c32_decode("1")


def test_tampered_checksum_rejected():
    address = c32_address(22, HASH)
    last = address[-1]
    tampered = address[:-1] + ("0" if last != "0" else "1")
    assert not is_valid_address(tampered)
    with pytest.raises(ValueError, match="checksum"):
        c32_address_decode(tampered)


@pytest.mark.parametrize("bad", ["", "SP", "XP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7", "SPU"])
def test_malformed_addresses_rejected(bad):
    assert not is_valid_address(bad)


def test_invalid_version_and_length():
    with pytest.raises(ValueError):
        c32_address(32, HASH)
    with pytest.raises(ValueError):
        c32_address(22, HASH[:19])


def test_hash_lengths():
    assert len(hash160(b"stacks")) == 20
    assert len(sha512_256(b"stacks")) == 32
    assert sha512_256(b"a") != sha512_256(b"b")
