#!/usr/bin/env python3
"""
Entry point for running scripts as a module.

Usage:
    python -m agent_tools                                  # Show available commands
    python -m agent_tools wallet.get_wallet_status         # Run one script
    python -m agent_tools jing.cancel_ask 10 PEPE-STX      # Arguments are passed through
"""
import importlib
import sys

AVAILABLE_COMMANDS = {
    "jing.cancel_ask": "Cancel a Jing ask you created",
    "jing.submit_ask": "Fill an open Jing ask",
    "jing.get_market": "Show the Jing order book for a pair",
    "btc_runes.etch_runes": "Etch a rune via OrdinalsBot",
    "wallet.get_wallet_addresses": "List addresses for account indices 0-9",
    "wallet.get_wallet_status": "Show address and nonce of the configured account",
    "faucet.faucet_flood": "Request aiBTC test tokens from the faucet",
    "dao.propose_action_add_resource": "Propose an add-resource DAO action",
    "dao.get_protocol_treasury": "Show a DAO's protocol treasury",
}


def main():
    """Main entry point for the agent_tools module."""
    if len(sys.argv) < 2:
        print("Usage: python -m agent_tools <command> [args...]")
        print("\nAvailable commands:")
        for cmd, desc in AVAILABLE_COMMANDS.items():
            print(f"  {cmd:35} - {desc}")
        print("\nExample: python -m agent_tools wallet.get_wallet_addresses")
        sys.exit(0)

    command = sys.argv[1]
    if command not in AVAILABLE_COMMANDS:
        print(f"Unknown command: {command}")
        print("Run 'python -m agent_tools' to see available commands.")
        sys.exit(1)

    module = importlib.import_module(f"agent_tools.commands.{command}")
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
