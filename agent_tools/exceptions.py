"""Exception hierarchy shared by every script.

Nothing below the entry point recovers from these; ``run_tool`` turns any of
them into the failure envelope and exit code 1.
"""
from typing import Any, Optional


class AgentToolsError(Exception):
    """Base exception for all agent-tools errors."""


class UsageError(AgentToolsError):
    """Missing or malformed command-line arguments."""


class ValidationError(AgentToolsError):
    """A value failed a semantic check (wrong network, symbol length, ...)."""


class ConfigError(ValidationError):
    """A required environment variable is missing or invalid."""


class AuthorizationError(AgentToolsError):
    """The derived account may not perform the requested mutation."""


class ClarityError(AgentToolsError):
    """A Clarity value could not be encoded or decoded."""


class NetworkError(AgentToolsError):
    """Transport failure or malformed response from a remote service."""


class ReadOnlyCallError(NetworkError):
    """A read-only contract call returned ``okay: false``."""


class BroadcastError(NetworkError):
    """The node rejected a transaction."""

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        reason_data: Optional[Any] = None,
        txid: Optional[str] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.reason_data = reason_data
        self.txid = txid
