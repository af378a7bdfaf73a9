"""
Command-line plumbing shared by the scripts.

``ToolArgumentParser`` turns argparse failures into ``UsageError`` carrying a
usage line and an example, and ``run_tool`` is the single top-level catch
that prints the response envelope and picks the exit code.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, NoReturn, Optional, Sequence

from agent_tools.config.logging_config import configure_tool_logging
from agent_tools.config.settings import load_env
from agent_tools.exceptions import UsageError, ValidationError
from agent_tools.helpers.responses import ToolResponse, create_error_response, send_to_llm

logger = logging.getLogger(__name__)

__all__ = [
    "ToolArgumentParser",
    "echo",
    "parse_contract_id",
    "parse_int_arg",
    "parse_tool_args",
    "run_tool",
]


class ToolArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2.

    Every script gets ``--env`` (extra .env file) and ``--debug``.
    """

    def __init__(self, *args, example: str | None = None, **kwargs):
        self.example = example
        self._argv: Optional[list[str]] = None
        super().__init__(*args, **kwargs)
        self.add_argument("--env", dest="env_file", default=None, help="Path to .env file to load")
        self.add_argument("--debug", action="store_true", help="Log debug output to stderr")

    def parse_args(self, args: Optional[Sequence[str]] = None, namespace=None):
        self._argv = list(sys.argv[1:] if args is None else args)
        return super().parse_args(self._argv, namespace)

    def usage_lines(self) -> list[str]:
        lines = [self.format_usage().strip()]
        if self.example:
            lines.append(f"Example: {self.example}")
        return lines

    def usage_error(self, message: str) -> UsageError:
        argv = self._argv if self._argv is not None else sys.argv[1:]
        head = f"{message}: {' '.join(argv)}" if argv else message
        return UsageError("\n".join([head, *self.usage_lines()]))

    def error(self, message: str) -> NoReturn:
        logger.debug("argparse: %s", message)
        raise self.usage_error("Invalid arguments")


def parse_tool_args(parser: ToolArgumentParser, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse argv, load .env files and configure logging for the run."""
    args = parser.parse_args(argv)
    load_env(args.env_file)
    configure_tool_logging(debug=args.debug)
    return args


def echo(message: str = "") -> None:
    """Progress line for humans; stdout is reserved for the envelope."""
    print(message, file=sys.stderr)


def parse_contract_id(value: str, label: str = "contract") -> tuple[str, str]:
    """Split ``ADDRESS.contract-name`` into its two non-empty parts."""
    parts = value.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValidationError(f"Invalid {label} identifier: {value!r} (expected ADDRESS.contract-name)")
    return parts[0], parts[1]


def parse_int_arg(value: str, label: str, minimum: int = 0) -> int:
    """Parse an integer argument; zero is a legitimate value."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer, got {value!r}")
    if number < minimum:
        raise ValidationError(f"{label} must be >= {minimum}, got {number}")
    return number


def run_tool(main: Callable[[], Optional[ToolResponse]]) -> NoReturn:
    """Run a script's main function and exit.

    A returned ``ToolResponse`` is printed as-is; a failed one exits with 1.
    Any exception becomes the failure envelope and exit code 1.
    """
    try:
        response = main()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        send_to_llm(create_error_response("Interrupted"))
        sys.exit(1)
    except Exception as exc:
        logger.debug("Script failed", exc_info=True)
        send_to_llm(create_error_response(exc))
        sys.exit(1)

    if response is None:
        sys.exit(0)
    send_to_llm(response)
    sys.exit(0 if response.success else 1)
