#!/usr/bin/env python3
"""
Read the protocol treasury configured in a DAO core-proposals extension.

Usage
  python -m agent_tools.commands.dao.get_protocol_treasury <core_proposals_contract>
"""

from __future__ import annotations

from typing import Optional, Sequence

from agent_tools.config.settings import Settings
from agent_tools.exceptions import NetworkError
from agent_tools.helpers.accounts import derive_child_account
from agent_tools.helpers.clarity import NoneCV, SomeCV, cv_to_json
from agent_tools.helpers.cli import ToolArgumentParser, parse_contract_id, parse_tool_args, run_tool
from agent_tools.helpers.responses import ToolResponse
from agent_tools.helpers.stacks_api import ReadOnlyCall, StacksApiClient

FUNCTION_NAME = "get-protocol-treasury"
NOT_INITIALIZED = "Contract has not been initialized with a treasury contract"


def build_parser() -> ToolArgumentParser:
    p = ToolArgumentParser(
        prog="python -m agent_tools.commands.dao.get_protocol_treasury",
        description="Show the protocol treasury of a core-proposals extension",
        example=(
            "python -m agent_tools.commands.dao.get_protocol_treasury "
            "ST35K818S3K2GSNEBC3M35GA3W8Q7X72KF4RVM3QA.wed-core-proposals"
        ),
    )
    p.add_argument("contract", help="Core proposals extension contract (ADDRESS.name)")
    return p


def get_protocol_treasury(
    settings: Settings, contract: str, client: Optional[StacksApiClient] = None
) -> ToolResponse:
    contract_address, contract_name = parse_contract_id(contract, "core proposals contract")
    client = client or StacksApiClient(settings.network)
    account = derive_child_account(settings.network, settings.mnemonic, settings.account_index)

    result = client.call_read_only(ReadOnlyCall(
        contract_address=contract_address,
        contract_name=contract_name,
        function_name=FUNCTION_NAME,
        sender_address=account.address,
    ))

    if isinstance(result, NoneCV):
        return ToolResponse(success=True, message=NOT_INITIALIZED)
    if isinstance(result, SomeCV):
        return ToolResponse(success=True, message="Protocol treasury", data=cv_to_json(result))
    raise NetworkError(f"Unexpected {FUNCTION_NAME} result: {cv_to_json(result)}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()

    def _run() -> ToolResponse:
        args = parse_tool_args(parser, argv)
        return get_protocol_treasury(Settings.from_env(), args.contract)

    run_tool(_run)


if __name__ == "__main__":
    main()
