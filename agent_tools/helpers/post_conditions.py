"""
Post-conditions: broadcast-time assertions bounding asset movement.

A transaction in ``deny`` mode fails on-chain unless every asset transfer it
performs is covered by one of these conditions.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from agent_tools.exceptions import ClarityError
from agent_tools.helpers.c32 import c32_address_decode

__all__ = [
    "FungibleConditionCode",
    "AssetInfo",
    "STXPostCondition",
    "FungiblePostCondition",
    "PostCondition",
    "create_asset_info",
    "make_standard_stx_post_condition",
    "make_contract_fungible_post_condition",
    "serialize_post_condition",
]


class PostConditionType(IntEnum):
    STX = 0x00
    FUNGIBLE = 0x01


class PostConditionPrincipalType(IntEnum):
    ORIGIN = 0x01
    STANDARD = 0x02
    CONTRACT = 0x03


class FungibleConditionCode(IntEnum):
    EQUAL = 0x01
    GREATER = 0x02
    GREATER_EQUAL = 0x03
    LESS = 0x04
    LESS_EQUAL = 0x05


@dataclass(frozen=True)
class AssetInfo:
    """A fungible asset: the token contract plus its ``define-fungible-token`` name."""

    contract_address: str
    contract_name: str
    asset_name: str

    @property
    def identifier(self) -> str:
        return f"{self.contract_address}.{self.contract_name}::{self.asset_name}"


@dataclass(frozen=True)
class STXPostCondition:
    principal: str
    condition_code: FungibleConditionCode
    amount: int


@dataclass(frozen=True)
class FungiblePostCondition:
    principal: str
    condition_code: FungibleConditionCode
    amount: int
    asset_info: AssetInfo


PostCondition = Union[STXPostCondition, FungiblePostCondition]


def _check_amount(amount: int) -> int:
    amount = int(amount)
    if not 0 <= amount < (1 << 64):
        raise ClarityError(f"Post-condition amount out of range: {amount}")
    return amount


def create_asset_info(contract_address: str, contract_name: str, asset_name: str) -> AssetInfo:
    return AssetInfo(contract_address, contract_name, asset_name)


def make_standard_stx_post_condition(
    address: str, condition_code: FungibleConditionCode, amount: int
) -> STXPostCondition:
    return STXPostCondition(address, condition_code, _check_amount(amount))


def make_contract_fungible_post_condition(
    address: str,
    contract_name: str,
    condition_code: FungibleConditionCode,
    amount: int,
    asset_info: AssetInfo,
) -> FungiblePostCondition:
    return FungiblePostCondition(
        f"{address}.{contract_name}", condition_code, _check_amount(amount), asset_info
    )


def _address_bytes(address: str) -> bytes:
    try:
        version, hash_bytes = c32_address_decode(address)
    except ValueError as exc:
        raise ClarityError(str(exc)) from exc
    return bytes([version]) + hash_bytes


def _lp_name(name: str) -> bytes:
    raw = name.encode("ascii")
    if not raw or len(raw) > 128:
        raise ClarityError(f"Invalid Clarity name: {name!r}")
    return struct.pack("B", len(raw)) + raw


def _serialize_principal(principal: str) -> bytes:
    if "." in principal:
        address, contract_name = principal.split(".", 1)
        return (
            bytes([PostConditionPrincipalType.CONTRACT])
            + _address_bytes(address)
            + _lp_name(contract_name)
        )
    return bytes([PostConditionPrincipalType.STANDARD]) + _address_bytes(principal)


def _serialize_asset_info(info: AssetInfo) -> bytes:
    return _address_bytes(info.contract_address) + _lp_name(info.contract_name) + _lp_name(info.asset_name)


def serialize_post_condition(pc: PostCondition) -> bytes:
    if isinstance(pc, STXPostCondition):
        return (
            bytes([PostConditionType.STX])
            + _serialize_principal(pc.principal)
            + bytes([pc.condition_code])
            + struct.pack(">Q", pc.amount)
        )
    if isinstance(pc, FungiblePostCondition):
        return (
            bytes([PostConditionType.FUNGIBLE])
            + _serialize_principal(pc.principal)
            + _serialize_asset_info(pc.asset_info)
            + bytes([pc.condition_code])
            + struct.pack(">Q", pc.amount)
        )
    raise ClarityError(f"Unsupported post-condition: {pc!r}")
