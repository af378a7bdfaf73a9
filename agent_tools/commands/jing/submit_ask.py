#!/usr/bin/env python3
"""
Fill a Jing ask: pay its STX price and receive the escrowed tokens.

Usage
  python -m agent_tools.commands.jing.submit_ask <swap_id> <pair> [account_index]
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.contracts import get_jing_contract
from agent_tools.config.settings import Settings
from agent_tools.config.tokens import (
    calculate_ask_fees,
    format_stx,
    format_token_amount,
    get_token_info,
    price_per_token,
    split_pair,
)
from agent_tools.exceptions import ValidationError
from agent_tools.helpers.abi import validate_contract_call
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.broadcast import broadcast_tx
from agent_tools.helpers.clarity import contract_principal_cv, uint_cv
from agent_tools.helpers.cli import ToolArgumentParser, echo, parse_int_arg, parse_tool_args, run_tool
from agent_tools.helpers.jing_api import get_ask_details, get_token_decimals
from agent_tools.helpers.post_conditions import (
    FungibleConditionCode,
    make_contract_fungible_post_condition,
    make_standard_stx_post_condition,
)
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import StacksApiClient
from agent_tools.helpers.transactions import (
    AnchorMode,
    ContractCallIntent,
    PostConditionMode,
    make_contract_call,
)

SUBMIT_FEE = 30_000  # uSTX
FUNCTION_NAME = "submit-swap"


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.jing.submit_ask",
        description="Submit a swap against an open Jing ask",
        example="python -m agent_tools.commands.jing.submit_ask 12 PEPE-STX",
    )
    p.add_argument("swap_id", help="ID of the ask to submit swap for")
    p.add_argument("pair", help="Trading pair (e.g., PEPE-STX)")
    p.add_argument("account_index", nargs="?", default=None, help="Account index to use, defaults to ACCOUNT_INDEX")
    return p


def submit_ask(
    settings: Settings,
    swap_id: int,
    pair: str,
    account_index: int = 0,
    client: Optional[StacksApiClient] = None,
) -> ToolResponse:
    token = get_token_info(pair)
    if token is None:
        raise ValidationError(f"Failed to get token info for pair: {pair}")
    symbol, _ = split_pair(pair)

    client = client or StacksApiClient(settings.network)
    account = derive_child_account(settings.network, settings.mnemonic, account_index)
    ask_address, ask_name = get_jing_contract("ASK")
    yang_address, yang_name = get_jing_contract("YANG")

    token_decimals = get_token_decimals(client, token, account.address)
    nonce = client.get_next_nonce(account.address)
    ask = get_ask_details(client, swap_id, account.address)
    fees = calculate_ask_fees(ask.amount)

    post_conditions = [
        # sender pays the ask price
        make_standard_stx_post_condition(account.address, FungibleConditionCode.EQUAL, ask.ustx),
        # ask contract releases the escrowed tokens
        make_contract_fungible_post_condition(
            ask_address, ask_name, FungibleConditionCode.EQUAL, ask.amount, token,
        ),
        # fee deposit from the YANG vault
        make_contract_fungible_post_condition(
            yang_address, yang_name, FungibleConditionCode.LESS_EQUAL, fees, token,
        ),
    ]

    echo(f"Submitting swap for ask {swap_id}:")
    echo("\nSwap Details:")
    echo(f"- Token decimals: {token_decimals}")
    echo(f"- You send: {format_stx(ask.ustx)}")
    echo(f"- You receive: {format_token_amount(ask.amount, token_decimals, symbol)}")
    echo(f"- Token fee: {format_token_amount(fees, token_decimals, symbol)} from YANG contract")
    echo(f"- Network fee: {format_stx(SUBMIT_FEE)}")
    if ask.amount > 0:
        echo(f"- Price per {symbol}: {price_per_token(ask.ustx, ask.amount, token_decimals):.8f} STX")
    echo("\nPost Conditions:")
    echo(f"- Your STX transfer: {ask.ustx} uSTX")
    echo(f"- Contract token transfer: {ask.amount} u{symbol}")
    echo(f"- Maximum fees: {fees} u{symbol}")

    function_args = (
        uint_cv(swap_id),
        contract_principal_cv(token.contract_address, token.contract_name),
        contract_principal_cv(yang_address, yang_name),
    )
    validate_contract_call(
        client.get_contract_interface(ask_address, ask_name), FUNCTION_NAME, function_args
    )

    intent = ContractCallIntent(
        contract_address=ask_address,
        contract_name=ask_name,
        function_name=FUNCTION_NAME,
        function_args=function_args,
        fee=SUBMIT_FEE,
        nonce=nonce,
        network=settings.network,
        anchor_mode=AnchorMode.ANY,
        post_condition_mode=PostConditionMode.DENY,
        post_conditions=post_conditions,
    )

    transaction = make_contract_call(intent, account.private_key)
    echo("\nBroadcasting transaction...")
    return broadcast_tx(client, transaction)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        args = parse_tool_args(parser, argv)
        swap_id = parse_int_arg(args.swap_id, "swap_id")
        settings = Settings.from_env()
        account_index = (
            settings.account_index if args.account_index is None
            else parse_int_arg(args.account_index, "account_index")
        )
        return submit_ask(settings, swap_id, args.pair, account_index)

    run_tool(_run)


if __name__ == "__main__":
    main()
