#!/usr/bin/env python3
"""
Print the Jing order book for a token pair.

Usage
  python -m agent_tools.commands.jing.get_market <pair>

Reads JING_API_URL / JING_API_KEY (public defaults apply when unset).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from agent_tools.config.tokens import split_pair
from agent_tools.exceptions import ValidationError
from agent_tools.helpers.cli import ToolArgumentParser, parse_tool_args, run_tool
from agent_tools.helpers.jing_api import JingClient
from agent_tools.helpers.responses import ToolResponse


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.jing.get_market",
        description="Show the Jing order book for a pair",
        example="python -m agent_tools.commands.jing.get_market PEPE-STX",
    )
    p.add_argument("pair", help="Token pair (e.g., PEPE-STX)")
    return p


def get_market(pair: str, client: Optional[JingClient] = None) -> ToolResponse[Any]:
    try:
        split_pair(pair)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    client = client or JingClient()
    order_book = client.get_order_book(pair)
    return ToolResponse(success=True, message=f"Order book for {pair.upper()}", data=order_book)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        args = parse_tool_args(parser, argv)
        return get_market(args.pair)

    run_tool(_run)


if __name__ == "__main__":
    main()
