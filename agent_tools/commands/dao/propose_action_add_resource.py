#!/usr/bin/env python3
"""
Propose adding a paid resource through a DAO action-proposals extension.

Usage
  python -m agent_tools.commands.dao.propose_action_add_resource \
    <action_proposals_extension> <add_resource_action> \
    <resource_name> <resource_description> <resource_price> [resource_url]

The resource parameters are serialized as a Clarity tuple and passed to
``propose-action`` as a buffer.
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.settings import Settings
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.broadcast import broadcast_tx
from agent_tools.helpers.clarity import (
    ClarityValue,
    buffer_cv,
    contract_principal_cv,
    none_cv,
    serialize_cv,
    string_utf8_cv,
    tuple_cv,
    uint_cv,
)
from agent_tools.helpers.cli import (
    ToolArgumentParser,
    parse_contract_id,
    parse_int_arg,
    parse_tool_args,
    run_tool,
)
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import StacksApiClient
from agent_tools.helpers.transactions import AnchorMode, ContractCallIntent, make_contract_call

# Flat fee; the node rejects anything below the network minimum
DEFAULT_FEE = 100_000  # uSTX
FUNCTION_NAME = "propose-action"


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.dao.propose_action_add_resource",
        description="Propose an add-resource action to a DAO",
        example=(
            "python -m agent_tools.commands.dao.propose_action_add_resource "
            "ST35K818S3K2GSNEBC3M35GA3W8Q7X72KF4RVM3QA.aibtcdao-action-proposals-v2 "
            "ST35K818S3K2GSNEBC3M35GA3W8Q7X72KF4RVM3QA.aibtcdao-action-add-resource "
            '"consultation" "consult with me for 1hr" 100000000 "https://aibtc.dev"'
        ),
    )
    p.add_argument("extension", help="Action proposals extension contract (ADDRESS.name)")
    p.add_argument("action", help="Add-resource action contract (ADDRESS.name)")
    p.add_argument("name", help="Resource name")
    p.add_argument("description", help="Resource description")
    p.add_argument("price", help="Resource price in uSTX")
    p.add_argument("url", nargs="?", default=None, help="Optional resource URL")
    return p


def encode_resource_params(name: str, description: str, price: int, url: Optional[str] = None) -> ClarityValue:
    """Tuple {name, description, price, url} packed into a buffer."""
    params = tuple_cv({
        "name": string_utf8_cv(name),
        "description": string_utf8_cv(description),
        "price": uint_cv(price),
        "url": string_utf8_cv(url) if url else none_cv(),
    })
    return buffer_cv(serialize_cv(params))


def propose_action_add_resource(
    settings: Settings,
    extension: str,
    action: str,
    name: str,
    description: str,
    price: int,
    url: Optional[str] = None,
    client: Optional[StacksApiClient] = None,
) -> ToolResponse:
    extension_address, extension_name = parse_contract_id(extension, "extension contract")
    action_address, action_name = parse_contract_id(action, "action contract")

    client = client or StacksApiClient(settings.network)
    account = derive_child_account(settings.network, settings.mnemonic, settings.account_index)
    nonce = client.get_next_nonce(account.address)

    intent = ContractCallIntent(
        contract_address=extension_address,
        contract_name=extension_name,
        function_name=FUNCTION_NAME,
        function_args=(
            contract_principal_cv(action_address, action_name),
            encode_resource_params(name, description, price, url),
        ),
        fee=DEFAULT_FEE,
        nonce=nonce,
        network=settings.network,
        anchor_mode=AnchorMode.ANY,
    )
    transaction = make_contract_call(intent, account.private_key)
    return broadcast_tx(client, transaction)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        args = parse_tool_args(parser, argv)
        price = parse_int_arg(args.price, "resource price")
        return propose_action_add_resource(
            Settings.from_env(),
            args.extension,
            args.action,
            args.name,
            args.description,
            price,
            args.url,
        )

    run_tool(_run)


if __name__ == "__main__":
    main()
