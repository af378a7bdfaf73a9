"""
Response envelope printed by every script.

Success: ``{"success": true, "message": ..., "data": ...}``
Failure: ``{"success": false, "message": ...}``
"""
from __future__ import annotations

import dataclasses
import json
import sys
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Optional, TextIO, TypeVar

T = TypeVar("T")

__all__ = ["ToolResponse", "create_error_response", "send_to_llm", "to_jsonable"]


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, Decimals, bytes and enums into JSON-friendly values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.repr
        }
    if isinstance(value, Enum):
        return value.name.lower()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class ToolResponse(Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            out["data"] = to_jsonable(self.data)
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def create_error_response(error: BaseException | str) -> ToolResponse:
    if isinstance(error, BaseException):
        message = str(error) or error.__class__.__name__
    else:
        message = str(error)
    return ToolResponse(success=False, message=message)


def send_to_llm(response: ToolResponse, stream: TextIO | None = None) -> None:
    """Emit the envelope as a single JSON line."""
    stream = stream or sys.stdout
    stream.write(response.to_json() + "\n")
    stream.flush()
