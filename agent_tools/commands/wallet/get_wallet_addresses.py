#!/usr/bin/env python3
"""
List the first ten addresses derived from MNEMONIC on NETWORK.

Usage
  python -m agent_tools.commands.wallet.get_wallet_addresses
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.settings import Settings
from agent_tools.helpers.accounts import derive_child_accounts
from agent_tools.helpers.cli import ToolArgumentParser, echo, parse_tool_args, run_tool
from agent_tools.helpers.responses import ToolResponse

MAX_INDEX = 9


def build_parser() -> ToolArgumentParser:
    return ToolArgumentParser(
        prog="python -m agent_tools.commands.wallet.get_wallet_addresses",
        description="List wallet addresses for account indices 0-9",
        example="python -m agent_tools.commands.wallet.get_wallet_addresses",
    )


def get_wallet_addresses(settings: Settings, max_index: int = MAX_INDEX) -> ToolResponse[dict]:
    addresses = derive_child_accounts(settings.network, settings.mnemonic, max_index)
    for index, address in enumerate(addresses):
        echo(f"{index}: {address}")
    return ToolResponse(
        success=True,
        message=f"Derived {len(addresses)} addresses on {settings.network}",
        data={str(index): address for index, address in enumerate(addresses)},
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        parse_tool_args(parser, argv)
        return get_wallet_addresses(Settings.from_env())

    run_tool(_run)


if __name__ == "__main__":
    main()
