"""
Tests for Clarity value serialization and JSON rendering.
"""
import pytest

from agent_tools.exceptions import ClarityError
from agent_tools.helpers.clarity import (
    bool_cv,
    buffer_cv,
    contract_principal_cv,
    cv_to_hex,
    cv_to_json,
    deserialize_cv,
    hex_to_cv,
    int_cv,
    list_cv,
    none_cv,
    response_err_cv,
    response_ok_cv,
    serialize_cv,
    some_cv,
    standard_principal_cv,
    string_ascii_cv,
    string_utf8_cv,
    tuple_cv,
    uint_cv,
)
from tests.conftest import DEPLOYER, OTHER_ADDRESS


def test_uint_encoding():
    assert serialize_cv(uint_cv(1)) == b"\x01" + b"\x00" * 15 + b"\x01"


def test_int_negative_encoding():
    assert serialize_cv(int_cv(-1)) == b"\x00" + b"\xff" * 16


def test_bool_and_none_encoding():
    assert serialize_cv(bool_cv(True)) == b"\x03"
    assert serialize_cv(bool_cv(False)) == b"\x04"
    assert serialize_cv(none_cv()) == b"\x09"


def test_buffer_and_string_length_prefix():
    assert serialize_cv(buffer_cv(b"\xde\xad")) == b"\x02\x00\x00\x00\x02\xde\xad"
    assert serialize_cv(string_ascii_cv("hi")) == b"\x0d\x00\x00\x00\x02hi"
    # length counts bytes, not characters
    assert serialize_cv(string_utf8_cv("é")) == b"\x0e\x00\x00\x00\x02" + "é".encode()


def test_tuple_keys_are_sorted():
    cv = tuple_cv({"b": uint_cv(2), "a": uint_cv(1)})
    raw = serialize_cv(cv)
    assert raw[:5] == b"\x0c\x00\x00\x00\x02"
    assert raw[5:7] == b"\x01a"


def test_contract_principal_encoding():
    raw = serialize_cv(contract_principal_cv(DEPLOYER, "yang"))
    assert raw[0] == 0x06
    assert raw[1] == 22
    assert raw[22:] == b"\x04yang"


@pytest.mark.parametrize("cv", [
    uint_cv(0),
    uint_cv(2 ** 128 - 1),
    int_cv(-(2 ** 127)),
    buffer_cv(b""),
    standard_principal_cv(OTHER_ADDRESS),
    contract_principal_cv(DEPLOYER, "ft-stx-swap-v1"),
    response_ok_cv(tuple_cv({"ustx": uint_cv(5), "ft-sender": standard_principal_cv(OTHER_ADDRESS)})),
    response_err_cv(uint_cv(404)),
    some_cv(list_cv([uint_cv(1), uint_cv(2)])),
    string_utf8_cv("resource • name"),
])
def test_serialize_deserialize(cv):
    assert deserialize_cv(serialize_cv(cv)) == cv
    assert hex_to_cv(cv_to_hex(cv)) == cv


def test_out_of_range_values_rejected():
    with pytest.raises(ClarityError):
        uint_cv(-1)
    with pytest.raises(ClarityError):
        uint_cv(2 ** 128)
    with pytest.raises(ClarityError):
        int_cv(2 ** 127)


def test_non_ascii_string_rejected():
    with pytest.raises(ClarityError):
        string_ascii_cv("café")


def test_invalid_principal_fails_at_serialization():
    cv = standard_principal_cv("not-an-address")
    with pytest.raises(ClarityError):
        serialize_cv(cv)


def test_trailing_bytes_rejected():
    with pytest.raises(ClarityError, match="Trailing"):
        deserialize_cv(serialize_cv(uint_cv(1)) + b"\x00")


def test_truncated_and_unknown_values_rejected():
    with pytest.raises(ClarityError):
        deserialize_cv(b"\x01\x00")
    with pytest.raises(ClarityError):
        deserialize_cv(b"\x42")
    with pytest.raises(ClarityError):
        hex_to_cv("0xzz")


@pytest.mark.parametrize("hex_value", [
    "0e00000001ff",                                  # string-utf8, invalid utf-8
    "0d00000001ff",                                  # string-ascii, non-ascii byte
    "05" + "20" + "01" * 20,                         # standard principal, version 32
    "06" + "16" + "01" * 20 + "01" + "ff",           # contract principal, bad name
    "0c00000001" + "01ff" + "0100000000000000000000000000000001",  # tuple key
])
def test_malformed_node_data_raises_clarity_error(hex_value):
    with pytest.raises(ClarityError):
        hex_to_cv(hex_value)


def test_cv_to_json_response():
    assert cv_to_json(response_ok_cv(uint_cv(5))) == {
        "type": "(response uint UnknownType)",
        "value": {"type": "uint", "value": "5"},
        "success": True,
    }
    assert cv_to_json(response_err_cv(uint_cv(1)))["success"] is False


def test_cv_to_json_swap_tuple_lookup():
    swap = response_ok_cv(tuple_cv({
        "ustx": uint_cv(1_000_000),
        "amount": uint_cv(10_000_000),
        "ft-sender": standard_principal_cv(OTHER_ADDRESS),
    }))
    json_value = cv_to_json(swap)
    fields = json_value["value"]["value"]
    assert fields["ustx"]["value"] == "1000000"
    assert fields["ft-sender"] == {"type": "principal", "value": OTHER_ADDRESS}


def test_cv_to_json_optional():
    assert cv_to_json(none_cv()) == {"type": "(optional none)", "value": None}
    rendered = cv_to_json(some_cv(contract_principal_cv(DEPLOYER, "treasury")))
    assert rendered["type"] == "(optional principal)"
    assert rendered["value"] == {"type": "principal", "value": f"{DEPLOYER}.treasury"}
