"""
Jing order book: HTTP API client and on-chain ask lookups.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import requests

from agent_tools.config.contracts import JING_API_KEY, JING_API_URL, get_jing_contract
from agent_tools.config.network import get_http_timeout
from agent_tools.exceptions import AuthorizationError, NetworkError
from agent_tools.helpers.clarity import cv_to_json, uint_cv
from agent_tools.helpers.post_conditions import AssetInfo
from agent_tools.helpers.stacks_api import ReadOnlyCall, StacksApiClient

logger = logging.getLogger(__name__)

__all__ = [
    "AskDetails",
    "JingClient",
    "ensure_ask_owner",
    "get_ask_details",
    "get_token_decimals",
]


@dataclass(frozen=True)
class AskDetails:
    swap_id: int
    ustx: int
    amount: int
    ft_sender: str
    ft: str | None = None


class JingClient:
    """Read access to the Jing order-book API."""

    def __init__(self, api_url: str | None = None, api_key: str | None = None,
                 timeout: int | None = None, session: requests.Session | None = None):
        self.api_url = (api_url or os.getenv("JING_API_URL") or JING_API_URL).rstrip("/")
        self.api_key = api_key or os.getenv("JING_API_KEY") or JING_API_KEY
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = session or requests.Session()
        self.session.headers.update({"x-api-key": self.api_key, "Accept": "application/json"})

    def get_order_book(self, pair: str) -> Any:
        url = f"{self.api_url}/order-book/{pair.upper()}"
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise NetworkError(f"Malformed order book response from {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch order book for {pair}: {exc}") from exc


def get_ask_details(client: StacksApiClient, swap_id: int, sender_address: str) -> AskDetails:
    """Read an ask through ``get-swap`` on the ask contract."""
    ask_address, ask_name = get_jing_contract("ASK")
    result = client.call_read_only(ReadOnlyCall(
        contract_address=ask_address,
        contract_name=ask_name,
        function_name="get-swap",
        sender_address=sender_address,
        function_args=(uint_cv(swap_id),),
    ))
    json_result = cv_to_json(result)
    if not json_result.get("success"):
        raise NetworkError(f"Failed to get ask details for swap {swap_id}")

    try:
        swap = json_result["value"]["value"]
        return AskDetails(
            swap_id=swap_id,
            ustx=int(swap["ustx"]["value"]),
            amount=int(swap["amount"]["value"]),
            ft_sender=swap["ft-sender"]["value"],
            ft=swap.get("ft", {}).get("value"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise NetworkError(f"Unexpected get-swap result for swap {swap_id}: {json_result}") from exc


def get_token_decimals(client: StacksApiClient, token: AssetInfo, sender_address: str) -> int:
    """Decimals reported by the token's SIP-010 ``get-decimals``."""
    result = client.call_read_only(ReadOnlyCall(
        contract_address=token.contract_address,
        contract_name=token.contract_name,
        function_name="get-decimals",
        sender_address=sender_address,
    ))
    json_result = cv_to_json(result)
    try:
        return int(json_result["value"]["value"])
    except (KeyError, TypeError, ValueError) as exc:
        raise NetworkError(f"Unexpected get-decimals result for {token.identifier}: {json_result}") from exc


def ensure_ask_owner(ask: AskDetails, address: str) -> None:
    """Only the account that created an ask may cancel it."""
    if ask.ft_sender != address:
        raise AuthorizationError(
            f"Only the ask creator ({ask.ft_sender}) can cancel this ask; "
            f"derived address is {address}"
        )
