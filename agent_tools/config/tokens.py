"""
Token configurations for the Jing scripts.

Contains the traded token pairs, their contract metadata, and the unit
conversions used for display (micro-units to whole units, per-token price
normalized across decimal counts, Jing ask fees).
"""

from decimal import ROUND_CEILING, Decimal
from typing import Optional

from agent_tools.config.network import STX_DECIMALS
from agent_tools.helpers.post_conditions import AssetInfo

# Token configurations keyed by symbol; pairs are quoted in STX ("PEPE-STX")
TOKEN_CONFIG: dict[str, dict[str, str]] = {
    "PEPE": {
        "name": "Pepe",
        "contract_address": "SP1Z92MPDQEWZXW36VX71Q25HKF5K2EPCJ304F275",
        "contract_name": "tokensoft-token-v4k68639zxz",
        "asset_name": "tokensoft-token",
    },
    "WELSH": {
        "name": "Welshcorgicoin",
        "contract_address": "SP3NE50GEXFG9SZGTT51P40X2CKYSZ5CC4ZTZ7A2G",
        "contract_name": "welshcorgicoin-token",
        "asset_name": "welshcorgicoin",
    },
    "LEO": {
        "name": "Leo",
        "contract_address": "SP1AY6K3PQV5MRT6R4S671NWW2FRVPKM0BR162CT6",
        "contract_name": "leo-token",
        "asset_name": "leo",
    },
    "ROO": {
        "name": "Roo",
        "contract_address": "SP2C1WREHGM75C7TGFAEJPFKTFTEGZKF6DFT6E2GE",
        "contract_name": "kangaroo",
        "asset_name": "kangaroo",
    },
}

QUOTE_SYMBOL = "STX"

# Jing charges 0.25% of the token amount, held in the YIN/YANG vaults
ASK_FEE_BPS = 25
BPS_DENOMINATOR = 10_000


def split_pair(pair: str) -> tuple[str, str]:
    """'PEPE-STX' -> ('PEPE', 'STX')"""
    parts = pair.upper().split("-")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid pair: {pair!r} (expected TOKEN-STX)")
    return parts[0], parts[1]


def get_token_info(pair: str) -> Optional[AssetInfo]:
    """Asset info for the base token of a pair, or None if unknown."""
    try:
        base, quote = split_pair(pair)
    except ValueError:
        return None
    if quote != QUOTE_SYMBOL or base not in TOKEN_CONFIG:
        return None
    info = TOKEN_CONFIG[base]
    return AssetInfo(info["contract_address"], info["contract_name"], info["asset_name"])


def display_value(raw: int, decimals: int) -> Decimal:
    """Micro-units to whole units: raw / 10^decimals (exact)."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    return Decimal(int(raw)).scaleb(-decimals)


def to_raw(amount: Decimal | int | str, decimals: int) -> int:
    """Whole units to micro-units; the inverse of display_value."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    return int(Decimal(str(amount)).scaleb(decimals).to_integral_value())


def normalize_price(price: Decimal, from_decimals: int, to_decimals: int) -> Decimal:
    """Rescale a price by 10^(to_decimals - from_decimals)."""
    return Decimal(price).scaleb(to_decimals - from_decimals)


def price_per_token(ustx: int, amount: int, token_decimals: int) -> Decimal:
    """STX paid per whole token for an order of ``amount`` micro-tokens."""
    if amount <= 0:
        raise ValueError("amount must be positive to compute a price")
    raw_price = Decimal(int(ustx)) / Decimal(int(amount))
    return normalize_price(raw_price, STX_DECIMALS, token_decimals)


def calculate_ask_fees(amount: int) -> int:
    """Jing ask fee in micro-tokens, rounded up so it bounds the on-chain fee."""
    fee = Decimal(int(amount)) * ASK_FEE_BPS / BPS_DENOMINATOR
    return int(fee.to_integral_value(rounding=ROUND_CEILING))


def format_stx(ustx: int) -> str:
    return f"{display_value(ustx, STX_DECIMALS)} STX ({ustx} uSTX)"


def format_token_amount(amount: int, decimals: int, symbol: str) -> str:
    return f"{display_value(amount, decimals)} {symbol} ({amount} u{symbol})"
