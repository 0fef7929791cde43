"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses integers. Decimal here is only for formatting and
convenience (logs, the demo script, test output).
"""

from decimal import Decimal, getcontext
from typing import Any, Mapping

from .exc import AmountDomainError
from .constants import MAX_BPS, BPS_QUANTUM
from .amounts import TokenAmount, decimal_from_units

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default global precision (number of significant digits) for Decimal-based
#: formatting. This does not affect core arithmetic which uses integers.
DEFAULT_DECIMAL_PRECISION: int = 40
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('1e-9')     -> '1.000000000000000000E-9'
    """
    return format(x, f".{places}E")


def fmt_units(units: int, decimals: int, symbol: str = "") -> str:
    """Human string for an amount of base units, e.g. fmt_units(150000000, 8, 'wBTC') -> '1.5 wBTC'."""
    d = decimal_from_units(units, decimals)
    text = format(d.normalize(), "f") if d != 0 else "0"
    return f"{text} {symbol}".rstrip()


def amount_to_decimal(a: TokenAmount) -> Decimal:
    """Convert a TokenAmount into a Decimal for logging/printing only."""
    if a is None:
        raise AmountDomainError("amount_to_decimal(): received None")
    if not isinstance(a, TokenAmount):
        raise AmountDomainError("amount_to_decimal(): unsupported amount type")
    _dbg(f"amount_to_decimal: value={a.value}, decimals={a.decimals}")
    return a.to_decimal()


def bps_to_decimal(bps: int) -> Decimal:
    """Return a bps value as a fraction of one (e.g. 250 -> 0.025), for display only."""
    if bps < 0 or bps > MAX_BPS:
        raise AmountDomainError(f"bps_to_decimal(): out of range bps={bps}")
    return (Decimal(bps) * BPS_QUANTUM).normalize()


def fmt_bps(bps: int) -> str:
    """Percent string for a bps value, e.g. 250 -> '2.5%'."""
    pct = bps_to_decimal(bps) * 100
    return f"{format(pct.normalize(), 'f')}%"


def fmt_event(name: str, args: Mapping[str, Any]) -> str:
    """Stable one-line rendering of an event payload for logs."""
    body = " ".join(f"{k}={v}" for k, v in args.items())
    return f"{name} {body}".rstrip()


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "fmt_units",
    "amount_to_decimal",
    "bps_to_decimal",
    "fmt_bps",
    "fmt_event",
]
