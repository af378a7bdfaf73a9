#!/usr/bin/env python3
"""
Show index, address and current nonce of the configured account.

Usage
  python -m agent_tools.commands.wallet.get_wallet_status
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.settings import Settings
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.cli import ToolArgumentParser, echo, parse_tool_args, run_tool
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import StacksApiClient


def build_parser() -> ToolArgumentParser:
    return ToolArgumentParser(
        prog="python -m agent_tools.commands.wallet.get_wallet_status",
        description="Show the configured account's address and nonce",
        example="ACCOUNT_INDEX=1 python -m agent_tools.commands.wallet.get_wallet_status",
    )


def get_wallet_status(settings: Settings, client: Optional[StacksApiClient] = None) -> ToolResponse[dict]:
    client = client or StacksApiClient(settings.network)
    account = derive_child_account(settings.network, settings.mnemonic, settings.account_index)
    nonce = client.get_account_nonce(account.address)

    echo(f"Account index: {settings.account_index}")
    echo(f"Account address: {account.address}")
    echo(f"Nonce: {nonce}")
    return ToolResponse(
        success=True,
        message=f"Account {settings.account_index} status",
        data={
            "account_index": settings.account_index,
            "address": account.address,
            "nonce": nonce,
        },
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        parse_tool_args(parser, argv)
        return get_wallet_status(Settings.from_env())

    run_tool(_run)


if __name__ == "__main__":
    main()
