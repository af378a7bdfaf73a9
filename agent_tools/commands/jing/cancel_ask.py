#!/usr/bin/env python3
"""
Cancel a Jing ask and recover the escrowed tokens plus the fee deposit.

Usage
  python -m agent_tools.commands.jing.cancel_ask <swap_id> <pair> [account_index]

Behavior
  - Reads the ask through ``get-swap`` and refuses unless the derived
    account created it.
  - Deny-mode post-conditions: the ask contract returns exactly the escrowed
    amount; the YANG vault returns at most the fee deposit.
"""

from __future__ import annotations

import logging
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
from agent_tools.helpers.jing_api import ensure_ask_owner, get_ask_details, get_token_decimals
from agent_tools.helpers.post_conditions import FungibleConditionCode, make_contract_fungible_post_condition
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import StacksApiClient
from agent_tools.helpers.transactions import (
    AnchorMode,
    ContractCallIntent,
    PostConditionMode,
    make_contract_call,
)

logger = logging.getLogger(__name__)

CANCEL_FEE = 10_000  # uSTX
FUNCTION_NAME = "cancel"


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.jing.cancel_ask",
        description="Cancel a Jing ask you created",
        example="python -m agent_tools.commands.jing.cancel_ask 10 PEPE-STX",
    )
    p.add_argument("swap_id", help="ID of the ask to cancel")
    p.add_argument("pair", help="Trading pair (e.g., PEPE-STX)")
    p.add_argument("account_index", nargs="?", default=None, help="Account index to use, defaults to ACCOUNT_INDEX")
    return p


def cancel_ask(
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
    logger.debug("Account %s (index %s), nonce %s", account.address, account_index, nonce)
    echo(f"Preparing to cancel ask {swap_id} from account {account.address}")

    ask = get_ask_details(client, swap_id, account.address)
    fees = calculate_ask_fees(ask.amount)

    echo("\nAsk details:")
    echo(f"- Creator: {ask.ft_sender}")
    echo(f"- Token decimals: {token_decimals}")
    echo(f"- Amount: {format_token_amount(ask.amount, token_decimals, symbol)}")
    echo(f"- STX price: {format_stx(ask.ustx)}")
    if ask.amount > 0:
        echo(f"- Price per {symbol}: {price_per_token(ask.ustx, ask.amount, token_decimals):.8f} STX")
    echo(f"- Refundable fees: {format_token_amount(fees, token_decimals, symbol)}")
    echo(f"- Gas fee: {format_stx(CANCEL_FEE)}")

    ensure_ask_owner(ask, account.address)

    post_conditions = [
        make_contract_fungible_post_condition(
            yang_address, yang_name, FungibleConditionCode.LESS_EQUAL, fees, token,
        ),
        make_contract_fungible_post_condition(
            ask_address, ask_name, FungibleConditionCode.EQUAL, ask.amount, token,
        ),
    ]
    echo("\nPost Conditions:")
    echo(f"- Contract returns: {format_token_amount(ask.amount, token_decimals, symbol)}")
    echo(f"- YANG contract returns up to: {format_token_amount(fees, token_decimals, symbol)}")

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
        fee=CANCEL_FEE,
        nonce=nonce,
        network=settings.network,
        anchor_mode=AnchorMode.ANY,
        post_condition_mode=PostConditionMode.DENY,
        post_conditions=post_conditions,
    )

    echo("\nCreating contract call...")
    transaction = make_contract_call(intent, account.private_key)
    echo("Broadcasting transaction...")
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
        return cancel_ask(settings, swap_id, args.pair, account_index)

    run_tool(_run)


if __name__ == "__main__":
    main()
