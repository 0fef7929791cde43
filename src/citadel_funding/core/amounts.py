"""
Amount primitives: integer token base units with per-token decimal precision.

- Every on-ledger quantity is an `int` count of base units (10^-decimals of a whole token).
- Non-negative domain: all amounts are >= 0; negative values are rejected at input.
- Rounding semantics: IN rounds up, OUT rounds down. Anything the caller *owes* is
  rounded up, anything the caller *receives* is rounded down.
- Decimal is used only at the I/O boundary (config files, display).

# Normalisation notes:
# - Amounts of different tokens are compared on the internal WAD scale (18 decimals).
#   Scaling up to WAD is exact for decimals <= 18; scaling down is directional.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN, ROUND_UP

from .constants import PRECISION_DECIMALS, MAX_ASSET_DECIMALS

# Import core exceptions
from .exc import AmountDomainError, InvariantViolation

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def _ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def _floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_floor_div expects a>=0 and b>0")
    return a // b


def _ten_pow(n: int) -> int:
    """Return 10**n for n >= 0 (internal helper)."""
    if n < 0:
        raise ValueError("_ten_pow expects non-negative exponent")
    return 10 ** n


def mul_div_down(x: int, num: int, den: int) -> int:
    """floor(x * num / den) in the integer domain (OUT-path)."""
    if x < 0 or num < 0:
        raise AmountDomainError(f"mul_div_down expects non-negative operands: x={x}, num={num}")
    if den == 0:
        raise ZeroDivisionError("mul_div_down: zero denominator")
    return _floor_div(x * num, den)


def mul_div_up(x: int, num: int, den: int) -> int:
    """ceil(x * num / den) in the integer domain (IN-path)."""
    if x < 0 or num < 0:
        raise AmountDomainError(f"mul_div_up expects non-negative operands: x={x}, num={num}")
    if den == 0:
        raise ZeroDivisionError("mul_div_up: zero denominator")
    return _ceil_div(x * num, den)


def check_decimals(decimals: int) -> int:
    """Validate a token precision accepted by the funding core."""
    if not isinstance(decimals, int) or isinstance(decimals, bool):
        raise AmountDomainError(f"decimals must be int, got {decimals!r}")
    if decimals < 0 or decimals > MAX_ASSET_DECIMALS:
        raise AmountDomainError(
            f"decimals must satisfy 0 <= decimals <= {MAX_ASSET_DECIMALS}, got {decimals}"
        )
    return decimals


def check_units(value: int, what: str = "amount") -> int:
    """Validate a non-negative integer amount of base units."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise AmountDomainError(f"{what} must be int base units, got {value!r}")
    if value < 0:
        raise AmountDomainError(f"{what} must be >= 0, got {value}")
    return value


# ----------------------------
# WAD normalisation
# ----------------------------

def to_wad(units: int, decimals: int) -> int:
    """Scale base units of a `decimals`-precision token up to the WAD grid (exact)."""
    check_units(units)
    check_decimals(decimals)
    return units * _ten_pow(PRECISION_DECIMALS - decimals)


def from_wad_down(wad: int, decimals: int) -> int:
    """OUT-path: floor a WAD value onto a `decimals` grid (won't give more OUT)."""
    check_decimals(decimals)
    return _floor_div(check_units(wad), _ten_pow(PRECISION_DECIMALS - decimals))


def from_wad_up(wad: int, decimals: int) -> int:
    """IN-path: ceil a WAD value onto a `decimals` grid (won't take less IN)."""
    check_decimals(decimals)
    return _ceil_div(check_units(wad), _ten_pow(PRECISION_DECIMALS - decimals))


# ----------------------------
# TokenAmount (value + precision)
# ----------------------------

@dataclass(frozen=True)
class TokenAmount:
    """Token amount in integer base units with its decimal precision (non-negative domain)."""
    value: int
    decimals: int

    def __post_init__(self):
        check_units(self.value, "TokenAmount.value")
        check_decimals(self.decimals)

    @classmethod
    def zero(cls, decimals: int) -> "TokenAmount":
        return cls(0, decimals)

    @classmethod
    def from_decimal(cls, x: Decimal, decimals: int) -> "TokenAmount":
        """Exact bridge from Decimal; raises if `x` is not on the token grid.
        Use units_from_decimal_in/out when a directional rounding is wanted.
        """
        lo = units_from_decimal_out(x, decimals)
        hi = units_from_decimal_in(x, decimals)
        if lo != hi:
            raise AmountDomainError(f"{x} is not representable with {decimals} decimals")
        return cls(lo, decimals)

    def is_zero(self) -> bool:
        return self.value == 0

    def to_decimal(self) -> Decimal:
        """Decimal view of the amount, for logs/printing only."""
        return decimal_from_units(self.value, self.decimals)

    def to_wad(self) -> int:
        return to_wad(self.value, self.decimals)

    def rescale(self, decimals: int, *, round_up: bool = False) -> "TokenAmount":
        """Re-express this amount on another precision grid (directional when lossy)."""
        wad = self.to_wad()
        units = from_wad_up(wad, decimals) if round_up else from_wad_down(wad, decimals)
        return TokenAmount(units, decimals)

    # Basic arithmetic in integer domain
    def _check_same_grid(self, other: "TokenAmount") -> None:
        if not isinstance(other, TokenAmount):
            raise AmountDomainError("TokenAmount arithmetic requires TokenAmount operands")
        if other.decimals != self.decimals:
            raise AmountDomainError(
                f"TokenAmount precision mismatch: {self.decimals} vs {other.decimals}"
            )

    def __add__(self, other: "TokenAmount") -> "TokenAmount":
        self._check_same_grid(other)
        return TokenAmount(self.value + other.value, self.decimals)

    def __sub__(self, other: "TokenAmount") -> "TokenAmount":
        self._check_same_grid(other)
        if self.value < other.value:
            raise InvariantViolation("TokenAmount subtraction underflow")
        return TokenAmount(self.value - other.value, self.decimals)

    def __lt__(self, other: "TokenAmount") -> bool:
        self._check_same_grid(other)
        return self.value < other.value

    def __le__(self, other: "TokenAmount") -> bool:
        self._check_same_grid(other)
        return self.value <= other.value


#
# ----------------------------
# Decimal bridges (I/O only)
# ----------------------------

def decimal_from_units(units: int, decimals: int) -> Decimal:
    """Return a Decimal whole-token value from integer base units (I/O/display only)."""
    check_units(units, "units")
    check_decimals(decimals)
    # Build from digits so large balances are not rounded to the context precision.
    return Decimal((0, tuple(int(d) for d in str(units)), -decimals))


def units_from_decimal_out(x: Decimal, decimals: int) -> int:
    """OUT-path: floor a Decimal token value to whole base units (won't give more OUT)."""
    x = _check_decimal(x, "units_from_decimal_out")
    check_decimals(decimals)
    q = x.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN)
    _dbg(f"units_from_decimal_out: x={x}, decimals={decimals} -> {q}")
    return int(q)


def units_from_decimal_in(x: Decimal, decimals: int) -> int:
    """IN-path: ceil a Decimal token value to whole base units (won't pay less IN)."""
    x = _check_decimal(x, "units_from_decimal_in")
    check_decimals(decimals)
    q = x.scaleb(decimals).to_integral_value(rounding=ROUND_UP)
    _dbg(f"units_from_decimal_in: x={x}, decimals={decimals} -> {q}")
    return int(q)


def _check_decimal(x, where: str) -> Decimal:
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    if x.is_nan() or x.is_infinite():
        raise AmountDomainError(f"{where}: invalid Decimal")
    if x < 0:
        raise AmountDomainError(f"{where}: negative not allowed")
    return x


__all__ = [
    "mul_div_down",
    "mul_div_up",
    "check_decimals",
    "check_units",
    "to_wad",
    "from_wad_down",
    "from_wad_up",
    "TokenAmount",
    "decimal_from_units",
    "units_from_decimal_out",
    "units_from_decimal_in",
]
