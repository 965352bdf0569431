"""Chain time conversion, number formatting and number parsing helpers."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

GENESIS_BLOCK_TIME = 1407722400
NQT_PER_SIGNA = 1e8

_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class NumberParseError(ValueError):
    """Raised when user supplied text cannot be read as a number."""


def chain_time_to_datetime(chain_time: int) -> datetime:
    """Convert seconds since the genesis block to an aware UTC datetime."""
    return datetime.fromtimestamp(GENESIS_BLOCK_TIME + chain_time, tz=timezone.utc)


def format_chain_time_datetime_utc(chain_time: int) -> str:
    return chain_time_to_datetime(chain_time).strftime("%Y-%m-%d %H:%M")


def format_chain_time_time_utc(chain_time: int) -> str:
    return chain_time_to_datetime(chain_time).strftime("%H:%M")


def format_chain_time_date(chain_time: int) -> str:
    return chain_time_to_datetime(chain_time).strftime("%Y-%m-%d")


def format_number(number: float, decimals: int) -> str:
    """Format with thousands separators and a fixed number of decimals (0..8).

    Any other ``decimals`` value gives the shortest representation.
    """
    if 0 <= decimals <= 8:
        return f"{number:,.{decimals}f}"
    return f"{float(number):,}"


def format_nqt(number: int) -> str:
    """Format an amount in NQT as SIGNA with two decimals."""
    return f"{number / NQT_PER_SIGNA:,.2f}"


def convert_fee_nqt(fee: int) -> float:
    """Convert a fee in NQT to SIGNA."""
    return fee / NQT_PER_SIGNA


def parse_number(message: str) -> float:
    """Parse a number where each ``k`` multiplies by 1000 and ``,`` is a decimal point."""
    kilo = message.count("k")
    text = message.replace("k", "").replace(",", ".")
    if not _FLOAT_PATTERN.fullmatch(text):
        raise NumberParseError(
            f"🚫 Couldn't parse <b>{text}</b> to number: parsing \"{text}\": invalid syntax"
        )
    number = float(text)
    if math.isinf(number) and "inf" not in text.lower():
        raise NumberParseError(
            f"🚫 Couldn't parse <b>{text}</b> to number: parsing \"{text}\": value out of range"
        )
    for _ in range(kilo):
        number *= 1000
    return number