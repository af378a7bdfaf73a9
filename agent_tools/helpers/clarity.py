"""
Clarity value construction and wire (de)serialization.

Values are small frozen dataclasses; ``serialize_cv`` / ``deserialize_cv``
implement the consensus binary format used for contract-call arguments and
read-only call results, and ``cv_to_json`` renders a value the way the Stacks
API tooling does (``{"type": ..., "value": ...}`` with ``success`` on
responses).
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

from agent_tools.exceptions import ClarityError
from agent_tools.helpers.c32 import c32_address, c32_address_decode

__all__ = [
    "ClarityType",
    "IntCV", "UIntCV", "BufferCV", "BoolCV",
    "StandardPrincipalCV", "ContractPrincipalCV",
    "ResponseOkCV", "ResponseErrCV", "NoneCV", "SomeCV",
    "ListCV", "TupleCV", "StringAsciiCV", "StringUtf8CV",
    "ClarityValue",
    "int_cv", "uint_cv", "buffer_cv", "bool_cv",
    "standard_principal_cv", "contract_principal_cv",
    "response_ok_cv", "response_err_cv", "none_cv", "some_cv",
    "list_cv", "tuple_cv", "string_ascii_cv", "string_utf8_cv",
    "serialize_cv", "deserialize_cv", "cv_to_hex", "hex_to_cv",
    "cv_to_json", "cv_to_value", "cv_type_string",
]

MAX_U128 = (1 << 128) - 1
MIN_I128 = -(1 << 127)
MAX_I128 = (1 << 127) - 1


class ClarityType(IntEnum):
    INT = 0x00
    UINT = 0x01
    BUFFER = 0x02
    BOOL_TRUE = 0x03
    BOOL_FALSE = 0x04
    PRINCIPAL_STANDARD = 0x05
    PRINCIPAL_CONTRACT = 0x06
    RESPONSE_OK = 0x07
    RESPONSE_ERR = 0x08
    OPTIONAL_NONE = 0x09
    OPTIONAL_SOME = 0x0A
    LIST = 0x0B
    TUPLE = 0x0C
    STRING_ASCII = 0x0D
    STRING_UTF8 = 0x0E


# --------------------------------------------------------------------------- #
# Value types                                                                 #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class IntCV:
    value: int

    def __post_init__(self):
        if not MIN_I128 <= self.value <= MAX_I128:
            raise ClarityError(f"int out of 128-bit range: {self.value}")


@dataclass(frozen=True)
class UIntCV:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= MAX_U128:
            raise ClarityError(f"uint out of 128-bit range: {self.value}")


@dataclass(frozen=True)
class BufferCV:
    value: bytes


@dataclass(frozen=True)
class BoolCV:
    value: bool


@dataclass(frozen=True)
class StandardPrincipalCV:
    address: str


@dataclass(frozen=True)
class ContractPrincipalCV:
    address: str
    contract_name: str


@dataclass(frozen=True)
class ResponseOkCV:
    value: "ClarityValue"


@dataclass(frozen=True)
class ResponseErrCV:
    value: "ClarityValue"


@dataclass(frozen=True)
class NoneCV:
    pass


@dataclass(frozen=True)
class SomeCV:
    value: "ClarityValue"


@dataclass(frozen=True)
class ListCV:
    items: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class TupleCV:
    data: dict = field(default_factory=dict)

    def __hash__(self):
        return hash(tuple(sorted(self.data.items())))


@dataclass(frozen=True)
class StringAsciiCV:
    value: str


@dataclass(frozen=True)
class StringUtf8CV:
    value: str


ClarityValue = Union[
    IntCV, UIntCV, BufferCV, BoolCV, StandardPrincipalCV, ContractPrincipalCV,
    ResponseOkCV, ResponseErrCV, NoneCV, SomeCV, ListCV, TupleCV,
    StringAsciiCV, StringUtf8CV,
]


# --------------------------------------------------------------------------- #
# Constructors                                                                #
# --------------------------------------------------------------------------- #

def int_cv(value: int) -> IntCV:
    return IntCV(int(value))


def uint_cv(value: int) -> UIntCV:
    return UIntCV(int(value))


def buffer_cv(value: bytes) -> BufferCV:
    return BufferCV(bytes(value))


def bool_cv(value: bool) -> BoolCV:
    return BoolCV(bool(value))


def standard_principal_cv(address: str) -> StandardPrincipalCV:
    return StandardPrincipalCV(address)


def contract_principal_cv(address: str, contract_name: str) -> ContractPrincipalCV:
    return ContractPrincipalCV(address, contract_name)


def response_ok_cv(value: ClarityValue) -> ResponseOkCV:
    return ResponseOkCV(value)


def response_err_cv(value: ClarityValue) -> ResponseErrCV:
    return ResponseErrCV(value)


def none_cv() -> NoneCV:
    return NoneCV()


def some_cv(value: ClarityValue) -> SomeCV:
    return SomeCV(value)


def list_cv(items) -> ListCV:
    return ListCV(tuple(items))


def tuple_cv(data: dict[str, ClarityValue]) -> TupleCV:
    return TupleCV(dict(data))


def string_ascii_cv(value: str) -> StringAsciiCV:
    try:
        value.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ClarityError(f"string-ascii contains non-ASCII characters: {value!r}") from exc
    return StringAsciiCV(value)


def string_utf8_cv(value: str) -> StringUtf8CV:
    return StringUtf8CV(value)


# --------------------------------------------------------------------------- #
# Serialization                                                               #
# --------------------------------------------------------------------------- #

def _serialize_address(address: str) -> bytes:
    try:
        version, hash_bytes = c32_address_decode(address)
    except ValueError as exc:
        raise ClarityError(str(exc)) from exc
    return bytes([version]) + hash_bytes


def _serialize_name(name: str, limit: int = 128) -> bytes:
    raw = name.encode("ascii")
    if not raw or len(raw) > limit:
        raise ClarityError(f"Invalid Clarity name: {name!r}")
    return struct.pack("B", len(raw)) + raw


def serialize_cv(cv: ClarityValue) -> bytes:
    """Serialize a Clarity value to its consensus binary form."""
    if isinstance(cv, IntCV):
        return bytes([ClarityType.INT]) + cv.value.to_bytes(16, "big", signed=True)
    if isinstance(cv, UIntCV):
        return bytes([ClarityType.UINT]) + cv.value.to_bytes(16, "big")
    if isinstance(cv, BufferCV):
        return bytes([ClarityType.BUFFER]) + struct.pack(">I", len(cv.value)) + cv.value
    if isinstance(cv, BoolCV):
        return bytes([ClarityType.BOOL_TRUE if cv.value else ClarityType.BOOL_FALSE])
    if isinstance(cv, StandardPrincipalCV):
        return bytes([ClarityType.PRINCIPAL_STANDARD]) + _serialize_address(cv.address)
    if isinstance(cv, ContractPrincipalCV):
        return (
            bytes([ClarityType.PRINCIPAL_CONTRACT])
            + _serialize_address(cv.address)
            + _serialize_name(cv.contract_name)
        )
    if isinstance(cv, ResponseOkCV):
        return bytes([ClarityType.RESPONSE_OK]) + serialize_cv(cv.value)
    if isinstance(cv, ResponseErrCV):
        return bytes([ClarityType.RESPONSE_ERR]) + serialize_cv(cv.value)
    if isinstance(cv, NoneCV):
        return bytes([ClarityType.OPTIONAL_NONE])
    if isinstance(cv, SomeCV):
        return bytes([ClarityType.OPTIONAL_SOME]) + serialize_cv(cv.value)
    if isinstance(cv, ListCV):
        out = bytes([ClarityType.LIST]) + struct.pack(">I", len(cv.items))
        return out + b"".join(serialize_cv(item) for item in cv.items)
    if isinstance(cv, TupleCV):
        out = bytes([ClarityType.TUPLE]) + struct.pack(">I", len(cv.data))
        # Keys are serialized in lexicographic order
        for key in sorted(cv.data):
            out += _serialize_name(key) + serialize_cv(cv.data[key])
        return out
    if isinstance(cv, StringAsciiCV):
        raw = cv.value.encode("ascii")
        return bytes([ClarityType.STRING_ASCII]) + struct.pack(">I", len(raw)) + raw
    if isinstance(cv, StringUtf8CV):
        raw = cv.value.encode("utf-8")
        return bytes([ClarityType.STRING_UTF8]) + struct.pack(">I", len(raw)) + raw
    raise ClarityError(f"Unsupported Clarity value: {cv!r}")


def cv_to_hex(cv: ClarityValue) -> str:
    return "0x" + serialize_cv(cv).hex()


class _Reader:
    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def read(self, n: int) -> bytes:
        if self.pos + n > len(self.data):
            raise ClarityError("Unexpected end of Clarity value")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def read_address(self) -> str:
        version = self.read_u8()
        try:
            return c32_address(version, self.read(20))
        except ValueError as exc:
            raise ClarityError(f"Invalid principal in Clarity value: {exc}") from exc

    def read_text(self, length: int, encoding: str) -> str:
        raw = self.read(length)
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise ClarityError(f"Invalid {encoding} data in Clarity value: {exc}") from exc

    def read_name(self) -> str:
        return self.read_text(self.read_u8(), "ascii")


def _read_cv(reader: _Reader) -> ClarityValue:
    type_id = reader.read_u8()
    try:
        kind = ClarityType(type_id)
    except ValueError:
        raise ClarityError(f"Unknown Clarity type id: {type_id:#04x}")

    if kind is ClarityType.INT:
        return IntCV(int.from_bytes(reader.read(16), "big", signed=True))
    if kind is ClarityType.UINT:
        return UIntCV(int.from_bytes(reader.read(16), "big"))
    if kind is ClarityType.BUFFER:
        return BufferCV(reader.read(reader.read_u32()))
    if kind is ClarityType.BOOL_TRUE:
        return BoolCV(True)
    if kind is ClarityType.BOOL_FALSE:
        return BoolCV(False)
    if kind is ClarityType.PRINCIPAL_STANDARD:
        return StandardPrincipalCV(reader.read_address())
    if kind is ClarityType.PRINCIPAL_CONTRACT:
        address = reader.read_address()
        return ContractPrincipalCV(address, reader.read_name())
    if kind is ClarityType.RESPONSE_OK:
        return ResponseOkCV(_read_cv(reader))
    if kind is ClarityType.RESPONSE_ERR:
        return ResponseErrCV(_read_cv(reader))
    if kind is ClarityType.OPTIONAL_NONE:
        return NoneCV()
    if kind is ClarityType.OPTIONAL_SOME:
        return SomeCV(_read_cv(reader))
    if kind is ClarityType.LIST:
        count = reader.read_u32()
        return ListCV(tuple(_read_cv(reader) for _ in range(count)))
    if kind is ClarityType.TUPLE:
        count = reader.read_u32()
        data = {}
        for _ in range(count):
            key = reader.read_name()
            data[key] = _read_cv(reader)
        return TupleCV(data)
    if kind is ClarityType.STRING_ASCII:
        return StringAsciiCV(reader.read_text(reader.read_u32(), "ascii"))
    return StringUtf8CV(reader.read_text(reader.read_u32(), "utf-8"))


def deserialize_cv(data: bytes) -> ClarityValue:
    """Deserialize one Clarity value; trailing bytes are an error."""
    reader = _Reader(bytes(data))
    cv = _read_cv(reader)
    if reader.pos != len(reader.data):
        raise ClarityError(f"Trailing bytes after Clarity value: {len(reader.data) - reader.pos}")
    return cv


def hex_to_cv(hex_str: str) -> ClarityValue:
    if hex_str.startswith("0x"):
        hex_str = hex_str[2:]
    try:
        raw = bytes.fromhex(hex_str)
    except ValueError as exc:
        raise ClarityError(f"Invalid hex Clarity value: {exc}") from exc
    return deserialize_cv(raw)


# --------------------------------------------------------------------------- #
# JSON rendering                                                              #
# --------------------------------------------------------------------------- #

def cv_type_string(cv: ClarityValue) -> str:
    """Clarity type signature of a value, e.g. ``(buff 4)`` or ``uint``."""
    if isinstance(cv, IntCV):
        return "int"
    if isinstance(cv, UIntCV):
        return "uint"
    if isinstance(cv, BufferCV):
        return f"(buff {len(cv.value)})"
    if isinstance(cv, BoolCV):
        return "bool"
    if isinstance(cv, (StandardPrincipalCV, ContractPrincipalCV)):
        return "principal"
    if isinstance(cv, ResponseOkCV):
        return f"(response {cv_type_string(cv.value)} UnknownType)"
    if isinstance(cv, ResponseErrCV):
        return f"(response UnknownType {cv_type_string(cv.value)})"
    if isinstance(cv, NoneCV):
        return "(optional none)"
    if isinstance(cv, SomeCV):
        return f"(optional {cv_type_string(cv.value)})"
    if isinstance(cv, ListCV):
        inner = cv_type_string(cv.items[0]) if cv.items else "UnknownType"
        return f"(list {len(cv.items)} {inner})"
    if isinstance(cv, TupleCV):
        fields = " ".join(f"({key} {cv_type_string(cv.data[key])})" for key in sorted(cv.data))
        return f"(tuple {fields})"
    if isinstance(cv, StringAsciiCV):
        return f"(string-ascii {len(cv.value.encode('ascii'))})"
    if isinstance(cv, StringUtf8CV):
        return f"(string-utf8 {len(cv.value.encode('utf-8'))})"
    raise ClarityError(f"Unsupported Clarity value: {cv!r}")


def cv_to_value(cv: ClarityValue, strict_json: bool = False) -> Any:
    """Plain Python value of a Clarity value.

    With ``strict_json`` integers are returned as strings so 128-bit values
    survive JSON consumers that use doubles.
    """
    if isinstance(cv, (IntCV, UIntCV)):
        return str(cv.value) if strict_json else cv.value
    if isinstance(cv, BufferCV):
        return "0x" + cv.value.hex()
    if isinstance(cv, BoolCV):
        return cv.value
    if isinstance(cv, StandardPrincipalCV):
        return cv.address
    if isinstance(cv, ContractPrincipalCV):
        return f"{cv.address}.{cv.contract_name}"
    if isinstance(cv, (ResponseOkCV, ResponseErrCV)):
        return cv_to_json(cv.value)
    if isinstance(cv, NoneCV):
        return None
    if isinstance(cv, SomeCV):
        return cv_to_json(cv.value)
    if isinstance(cv, ListCV):
        return [cv_to_json(item) for item in cv.items]
    if isinstance(cv, TupleCV):
        return {key: cv_to_json(value) for key, value in cv.data.items()}
    if isinstance(cv, (StringAsciiCV, StringUtf8CV)):
        return cv.value
    raise ClarityError(f"Unsupported Clarity value: {cv!r}")


def cv_to_json(cv: ClarityValue) -> dict[str, Any]:
    """Render a Clarity value as ``{"type", "value"[, "success"]}``."""
    if isinstance(cv, ResponseOkCV):
        return {"type": cv_type_string(cv), "value": cv_to_json(cv.value), "success": True}
    if isinstance(cv, ResponseErrCV):
        return {"type": cv_type_string(cv), "value": cv_to_json(cv.value), "success": False}
    return {"type": cv_type_string(cv), "value": cv_to_value(cv, strict_json=True)}
