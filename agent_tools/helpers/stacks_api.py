"""
Thin client for the Hiro Stacks API.

Covers the handful of endpoints the scripts need: nonce lookup, read-only
contract calls, contract interfaces and transaction broadcast. Every call is
a single blocking request; nothing is retried.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from agent_tools.config.network import get_api_url, get_http_timeout
from agent_tools.exceptions import NetworkError, ReadOnlyCallError
from agent_tools.helpers.clarity import ClarityValue, cv_to_hex, hex_to_cv
from agent_tools.helpers.transactions import StacksTransaction

logger = logging.getLogger(__name__)

__all__ = ["ReadOnlyCall", "BroadcastResult", "StacksApiClient"]


@dataclass(frozen=True)
class ReadOnlyCall:
    """Description of a read-only query against contract state."""

    contract_address: str
    contract_name: str
    function_name: str
    sender_address: str
    function_args: tuple = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "function_args", tuple(self.function_args))


@dataclass(frozen=True)
class BroadcastResult:
    txid: Optional[str]
    success: bool
    error: Optional[str] = None
    reason: Optional[str] = None
    reason_data: Optional[Any] = None


class StacksApiClient:
    def __init__(self, network: str, api_url: str | None = None, timeout: int | None = None,
                 session: requests.Session | None = None):
        self.network = network
        self.api_url = (api_url or get_api_url(network)).rstrip("/")
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    # ---------- helpers ----------

    def _url(self, path: str) -> str:
        return f"{self.api_url}{path}"

    def _get(self, path: str, params: dict | None = None) -> Any:
        url = self._url(path)
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise NetworkError(f"Malformed response from {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

    def _post_json(self, path: str, payload: dict) -> Any:
        url = self._url(path)
        logger.debug("POST %s payload=%s", url, payload)
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise NetworkError(f"Malformed response from {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

    # ---------- accounts ----------

    def get_next_nonce(self, address: str) -> int:
        """Next usable nonce, accounting for pending mempool transactions."""
        data = self._get(f"/extended/v1/address/{address}/nonces")
        try:
            nonce = int(data["possible_next_nonce"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Unexpected nonce response for {address}: {data}") from exc
        logger.debug("Next nonce for %s: %s", address, nonce)
        return nonce

    def get_account_nonce(self, address: str) -> int:
        """Confirmed account nonce as reported by the node."""
        data = self._get(f"/v2/accounts/{address}", params={"proof": 0})
        try:
            return int(data["nonce"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkError(f"Unexpected account response for {address}: {data}") from exc

    # ---------- contracts ----------

    def call_read_only(self, call: ReadOnlyCall) -> ClarityValue:
        """Execute a read-only function and decode its Clarity result."""
        path = f"/v2/contracts/call-read/{call.contract_address}/{call.contract_name}/{call.function_name}"
        data = self._post_json(path, {
            "sender": call.sender_address,
            "arguments": [cv_to_hex(arg) for arg in call.function_args],
        })
        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected read-only response: {data}")
        if not data.get("okay"):
            raise ReadOnlyCallError(
                f"Read-only call {call.contract_address}.{call.contract_name}::{call.function_name} "
                f"failed: {data.get('cause', 'unknown cause')}"
            )
        result = data.get("result")
        if not isinstance(result, str):
            raise NetworkError(f"Read-only response has no result: {data}")
        return hex_to_cv(result)

    def get_contract_interface(self, contract_address: str, contract_name: str) -> dict[str, Any]:
        return self._get(f"/v2/contracts/interface/{contract_address}/{contract_name}")

    # ---------- transactions ----------

    def broadcast_transaction(self, tx: StacksTransaction) -> BroadcastResult:
        """Submit a signed transaction.

        A rejection is returned, not raised, with the node's ``error``,
        ``reason`` and ``reason_data`` fields verbatim.
        """
        url = self._url("/v2/transactions")
        logger.debug("Broadcasting %s bytes to %s", len(tx.raw), url)
        try:
            resp = self.session.post(
                url,
                data=tx.serialize(),
                headers={"Content-Type": "application/octet-stream"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Broadcast to {url} failed: {exc}") from exc

        try:
            data = resp.json()
        except requests.exceptions.JSONDecodeError:
            data = resp.text.strip()

        if resp.ok:
            if isinstance(data, str):
                return BroadcastResult(txid=data.strip().strip('"'), success=True)
            if isinstance(data, dict) and "txid" in data and "error" not in data:
                return BroadcastResult(txid=data["txid"], success=True)
            raise NetworkError(f"Unexpected broadcast response: {data}")

        if isinstance(data, dict):
            return BroadcastResult(
                txid=data.get("txid"),
                success=False,
                error=data.get("error") or f"HTTP {resp.status_code}",
                reason=data.get("reason"),
                reason_data=data.get("reason_data"),
            )
        return BroadcastResult(
            txid=None,
            success=False,
            error=data or f"HTTP {resp.status_code}",
        )
