"""Check plot files for overlapping nonce ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .config import is_valid_account

INVALID_ACCOUNTS = "INVALID_ACCOUNTS"
NONCE_SIZE = 2**18
TIB_BYTES = 2**40

_UINT64_LIMIT = 1 << 64
_DIGITS = re.compile(r"[0-9]+")


@dataclass
class PlotFile:
    filename: str
    error: str | None = None
    start_nonce: int = 0
    amount_of_nonces: int = 0
    finish_of_nonces: int = 0
    shared_nonces: int = 0


@dataclass
class AccountPlots:
    plots: list[PlotFile] = field(default_factory=list)
    any_error: bool = False
    total_nonces: int = 0
    physical_capacity: float = 0.0
    shared_nonces: int = 0
    shared_capacity: float = 0.0


def _parse_uint64(text: str) -> int | None:
    if not _DIGITS.fullmatch(text):
        return None
    value = int(text)
    return value if value < _UINT64_LIMIT else None


def parse_plots(plots: str) -> dict[str, AccountPlots]:
    """Group plot file names (``ACCOUNT_START_AMOUNT``) by account id.

    Names may be separated by whitespace, newlines or commas. Names with an
    invalid account id are collected under ``INVALID_ACCOUNTS``.
    """
    result: dict[str, AccountPlots] = {}
    normalized = " ".join(plots.replace(",", " ").split())
    for name in normalized.split(" "):
        plot = PlotFile(filename=name)
        parts = name.split("_")
        account_id = parts[0]
        if not is_valid_account(account_id):
            plot.error = "invalid AccountID"
            group = result.setdefault(INVALID_ACCOUNTS, AccountPlots())
            group.plots.append(plot)
            group.any_error = True
            continue

        group = result.setdefault(account_id, AccountPlots())
        group.plots.append(plot)

        if len(parts) != 3:
            plot.error = "invalid filename"
            group.any_error = True
            continue

        start = _parse_uint64(parts[1])
        amount = _parse_uint64(parts[2])
        if start is None or amount is None:
            plot.start_nonce = start or 0
            plot.error = "invalid syntax"
            group.any_error = True
            continue

        plot.start_nonce = start
        plot.amount_of_nonces = amount
        plot.finish_of_nonces = (start + amount) % _UINT64_LIMIT
    return result


def check_plots_for_crossing(plots: str) -> dict[str, AccountPlots]:
    """Parse plot names and count, per account, nonces shared between files."""
    result = parse_plots(plots)
    for group in result.values():
        valid = [plot for plot in group.plots if plot.error is None]
        for plot in valid:
            group.total_nonces += plot.amount_of_nonces
            for other in valid:
                if other is plot:
                    continue
                if (
                    plot.start_nonce < other.finish_of_nonces
                    and plot.finish_of_nonces > other.start_nonce
                ):
                    shared = min(plot.finish_of_nonces, other.finish_of_nonces) - max(
                        plot.start_nonce, other.start_nonce
                    )
                    plot.shared_nonces += shared
                    group.shared_nonces += shared
        group.shared_nonces //= 2
        group.physical_capacity = group.total_nonces * NONCE_SIZE / TIB_BYTES
        group.shared_capacity = group.shared_nonces * NONCE_SIZE / TIB_BYTES
    return result