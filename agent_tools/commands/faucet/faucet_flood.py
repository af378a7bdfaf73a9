#!/usr/bin/env python3
"""
Request a large drip of the aiBTC test token for the configured account.

Usage
  python -m agent_tools.commands.faucet.faucet_flood

The faucet contract defaults to the testnet aiBTC token and can be pointed
elsewhere with FAUCET_CONTRACT=ADDRESS.contract-name.
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.contracts import get_faucet_contract
from agent_tools.config.settings import Settings
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.broadcast import broadcast_tx
from agent_tools.helpers.clarity import standard_principal_cv
from agent_tools.helpers.cli import ToolArgumentParser, echo, parse_tool_args, run_tool
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import StacksApiClient
from agent_tools.helpers.transactions import (
    AnchorMode,
    ContractCallIntent,
    PostConditionMode,
    make_contract_call,
)

DEFAULT_FEE = 250_000  # 0.25 STX
FUNCTION_NAME = "faucet-flood"


def build_parser() -> ToolArgumentParser:
    return ToolArgumentParser(
        prog="python -m agent_tools.commands.faucet.faucet_flood",
        description="Call faucet-flood for the configured account",
        example="python -m agent_tools.commands.faucet.faucet_flood",
    )


def faucet_flood(settings: Settings, client: Optional[StacksApiClient] = None) -> ToolResponse:
    client = client or StacksApiClient(settings.network)
    account = derive_child_account(settings.network, settings.mnemonic, settings.account_index)
    contract_address, contract_name = get_faucet_contract()
    nonce = client.get_next_nonce(account.address)

    intent = ContractCallIntent(
        contract_address=contract_address,
        contract_name=contract_name,
        function_name=FUNCTION_NAME,
        function_args=(standard_principal_cv(account.address),),
        fee=DEFAULT_FEE,
        nonce=nonce,
        network=settings.network,
        anchor_mode=AnchorMode.ANY,
        post_condition_mode=PostConditionMode.DENY,
        post_conditions=(),
    )
    transaction = make_contract_call(intent, account.private_key)
    response = broadcast_tx(client, transaction)
    echo(f"FROM: {account.address}")
    return response


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        parse_tool_args(parser, argv)
        return faucet_flood(Settings.from_env())

    run_tool(_run)


if __name__ == "__main__":
    main()
