"""
Environment-backed settings shared by every script.

Values are read once per process from the environment (optionally seeded
from a ``.env`` file) and never persisted.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from agent_tools.config.network import SUPPORTED_NETWORKS
from agent_tools.exceptions import ConfigError


def load_env(env_file: str | None = None) -> None:
    """Load ``.env`` from the working directory, then an explicit file on top."""
    base_env = Path(".env")
    if base_env.exists():
        load_dotenv(base_env)
    if env_file:
        if not Path(env_file).exists():
            raise ConfigError(f"Env file not found: {env_file}")
        load_dotenv(env_file, override=True)


def require_env(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise ConfigError(f"{name} environment variable is required")
    return v


def parse_account_index(value: str | int, source: str = "account index") -> int:
    try:
        index = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid {source}: {value!r} (expected a non-negative integer)")
    if index < 0:
        raise ConfigError(f"Invalid {source}: {index} (expected a non-negative integer)")
    return index


def validate_network(network: str) -> str:
    network = network.strip().lower()
    if network not in SUPPORTED_NETWORKS:
        raise ConfigError(
            f"Invalid NETWORK: {network!r}. Must be one of: {', '.join(SUPPORTED_NETWORKS)}"
        )
    return network


@dataclass(frozen=True)
class Settings:
    """Per-process configuration: network, mnemonic and account index."""

    network: str
    mnemonic: str
    account_index: int = 0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build Settings from NETWORK, MNEMONIC and ACCOUNT_INDEX.

        Raises:
            ConfigError: if MNEMONIC is missing or a value is malformed.
        """
        network = validate_network(os.getenv("NETWORK", "testnet"))
        mnemonic = require_env("MNEMONIC").strip()
        account_index = parse_account_index(os.getenv("ACCOUNT_INDEX", "0"), "ACCOUNT_INDEX")
        return cls(network=network, mnemonic=mnemonic, account_index=account_index)

    def __repr__(self) -> str:
        # Never print the mnemonic.
        return f"Settings(network={self.network!r}, account_index={self.account_index})"
