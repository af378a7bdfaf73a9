#!/usr/bin/env python3
"""
Etch a rune through OrdinalsBot.

Usage
  python -m agent_tools.commands.btc_runes.etch_runes <rune_name> <symbol> [network]

Behavior
  - Requires ORDINALSBOT_API_KEY and RECEIVE_ADDRESS; both are checked
    before the arguments and before any request is made.
  - Fixed etching terms: supply 1,000,000,000 fully premined, divisibility 6,
    fee rate 510, turbo.
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.settings import require_env
from agent_tools.exceptions import NetworkError, ValidationError
from agent_tools.helpers.cli import ToolArgumentParser, echo, parse_tool_args, run_tool
from agent_tools.helpers.ordinalsbot import InscriptionClient
from agent_tools.helpers.responses import ToolResponse

SUPPLY = 1_000_000_000
DIVISIBILITY = 6
FEE_RATE = 510
RUNE_NETWORKS = ("testnet", "mainnet")

# Placeholder inscription body; the etching itself carries the rune data
STANDARD_FILE = {
    "name": "rune.txt",
    "size": 1,
    "type": "plain/text",
    "dataURL": "data:plain/text;base64,YQ==",
}


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.btc_runes.etch_runes",
        description="Etch a rune via OrdinalsBot",
        example='python -m agent_tools.commands.btc_runes.etch_runes "FAKTORY•TOKEN" "K" testnet',
    )
    # Optional here so env checks run before the missing-argument error
    p.add_argument("rune_name", nargs="?", default=None, help="Rune name")
    p.add_argument("symbol", nargs="?", default=None, help="Single-character rune symbol")
    p.add_argument("network", nargs="?", default="testnet", help="testnet (default) or mainnet")
    return p


def validate_symbol(symbol: str) -> str:
    if len(symbol) != 1:
        raise ValidationError("Symbol must be a single character")
    return symbol


def validate_rune_network(network: str) -> str:
    if network not in RUNE_NETWORKS:
        raise ValidationError("Network must be either 'testnet' or 'mainnet'")
    return network


def build_etch_order(rune_name: str, symbol: str, receive_address: str) -> dict:
    return {
        "files": [dict(STANDARD_FILE)],
        "turbo": True,
        "rune": rune_name,
        "supply": SUPPLY,
        "symbol": symbol,
        "divisibility": DIVISIBILITY,
        "premine": SUPPLY,
        "fee": FEE_RATE,
        "receiveAddress": receive_address,
    }


def etch_runes(
    rune_name: str,
    symbol: str,
    network: str,
    api_key: str,
    receive_address: str,
    client: Optional[InscriptionClient] = None,
) -> ToolResponse[str]:
    validate_symbol(symbol)
    validate_rune_network(network)

    client = client or InscriptionClient(api_key, network)
    echo(f"Creating runes etch order for {rune_name} ({symbol}) on {network}")
    response = client.create_runes_etch_order(build_etch_order(rune_name, symbol, receive_address))
    if not isinstance(response, dict) or "id" not in response:
        raise NetworkError("Failed to create rune order")

    order_id = response["id"]
    order = client.get_order(order_id)
    status = order.get("status") if isinstance(order, dict) else None
    return ToolResponse(
        success=True,
        message="Rune etched successfully",
        data=f"Order ID: {order_id}, Status: {status}",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        args = parse_tool_args(parser, argv)
        api_key = require_env("ORDINALSBOT_API_KEY")
        receive_address = require_env("RECEIVE_ADDRESS")
        if not args.rune_name or not args.symbol:
            raise parser.usage_error("Invalid arguments")
        return etch_runes(args.rune_name, args.symbol, args.network, api_key, receive_address)

    run_tool(_run)


if __name__ == "__main__":
    main()
