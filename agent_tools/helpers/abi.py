"""
Check a contract call against the contract's published interface.

Only the shape is checked: the function exists, is public, takes the right
number of arguments and each argument has the right top-level Clarity type.
"""
from __future__ import annotations

import logging
from typing import Any

from agent_tools.exceptions import ValidationError
from agent_tools.helpers.clarity import (
    BoolCV,
    BufferCV,
    ClarityValue,
    ContractPrincipalCV,
    IntCV,
    ListCV,
    NoneCV,
    ResponseErrCV,
    ResponseOkCV,
    SomeCV,
    StandardPrincipalCV,
    StringAsciiCV,
    StringUtf8CV,
    TupleCV,
    UIntCV,
)

logger = logging.getLogger(__name__)

_SIMPLE_TYPES = {
    "int128": (IntCV,),
    "uint128": (UIntCV,),
    "bool": (BoolCV,),
    "principal": (StandardPrincipalCV, ContractPrincipalCV),
    "trait_reference": (ContractPrincipalCV,),
}

_COMPOUND_TYPES = {
    "buffer": (BufferCV,),
    "string-ascii": (StringAsciiCV,),
    "string-utf8": (StringUtf8CV,),
    "optional": (NoneCV, SomeCV),
    "list": (ListCV,),
    "tuple": (TupleCV,),
    "response": (ResponseOkCV, ResponseErrCV),
}


def _matches(abi_type: Any, cv: ClarityValue) -> bool:
    if isinstance(abi_type, str):
        expected = _SIMPLE_TYPES.get(abi_type)
        return expected is None or isinstance(cv, expected)
    if isinstance(abi_type, dict) and len(abi_type) == 1:
        kind = next(iter(abi_type))
        expected = _COMPOUND_TYPES.get(kind)
        if expected is None:
            return True
        if not isinstance(cv, expected):
            return False
        if kind == "optional" and isinstance(cv, SomeCV):
            return _matches(abi_type[kind], cv.value)
        return True
    return True


def validate_contract_call(interface: dict[str, Any], function_name: str, function_args) -> None:
    """Raise ValidationError if the call does not fit the contract interface."""
    functions = {fn.get("name"): fn for fn in interface.get("functions", [])}
    fn = functions.get(function_name)
    if fn is None:
        raise ValidationError(f"Function {function_name!r} not found in contract interface")
    if fn.get("access") != "public":
        raise ValidationError(f"Function {function_name!r} is not public")

    expected = fn.get("args", [])
    if len(expected) != len(function_args):
        raise ValidationError(
            f"Function {function_name!r} takes {len(expected)} arguments, got {len(function_args)}"
        )
    for arg_def, cv in zip(expected, function_args):
        if not _matches(arg_def.get("type"), cv):
            raise ValidationError(
                f"Argument {arg_def.get('name')!r} of {function_name!r} expects {arg_def.get('type')}, "
                f"got {type(cv).__name__}"
            )
    logger.debug("ABI check passed for %s (%d args)", function_name, len(function_args))
