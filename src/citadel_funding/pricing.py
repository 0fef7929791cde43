"""
Quote math for the funding sale — **pure functions only**.

Price convention: `price` is the cost of one whole output (citadel) token in
input-asset base units, i.e. a fixed-point number with the input asset's
precision. Example: wBTC (8 decimals) at 0.0005 wBTC per CTDL -> price=50000.

Pipeline (integer domain):
  1. Normalise the input amount and the price to the WAD grid (18 decimals).
     Both are scaled by the same factor, so an 8-decimal and an 18-decimal
     asset quoting the same economic price give the same output.
  2. undiscounted = norm_in * 10^citadel_decimals / norm_price
  3. amount_out   = undiscounted * (MAX_BPS + discount) / MAX_BPS

Steps 2 and 3 are evaluated as one exact fraction and floored once, so the
only rounding is the final OUT rounding (down). The inverse quote
(`quote_asset_amount_in`) rounds up, so the buyer never pays less than the
forward quote implies.
"""

from __future__ import annotations

from dataclasses import dataclass

from .core.constants import MAX_BPS, CITADEL_DECIMALS
from .core.amounts import (
    _ten_pow,
    check_decimals,
    check_units,
    from_wad_up,
    mul_div_down,
    mul_div_up,
    to_wad,
)
from .core.exc import AmountDomainError

# --- Debug utilities (toggleable) ---
DEBUG_PRICING = False

def _dbg(msg: str) -> None:
    if DEBUG_PRICING:
        print(f"[PRICING] {msg}")


def _check_quote_inputs(price: int, discount: int, asset_decimals: int, citadel_decimals: int) -> None:
    check_units(price, "price")
    if price == 0:
        raise AmountDomainError("price must be > 0 to quote")
    check_units(discount, "discount")
    if discount >= MAX_BPS:
        raise AmountDomainError(f"discount must satisfy 0 <= discount < {MAX_BPS}, got {discount}")
    check_decimals(asset_decimals)
    check_decimals(citadel_decimals)


def normalise_amount(asset_amount: int, asset_decimals: int) -> int:
    """Input-asset base units -> WAD grid (exact)."""
    return to_wad(asset_amount, asset_decimals)


def normalise_price(price: int, asset_decimals: int) -> int:
    """Asset-denominated price -> WAD grid (exact)."""
    return to_wad(price, asset_decimals)


def undiscounted_amount_out(asset_amount_in: int, price: int, asset_decimals: int,
                            citadel_decimals: int = CITADEL_DECIMALS) -> int:
    """Output for `asset_amount_in` at the oracle price with no discount (rounded down)."""
    _check_quote_inputs(price, 0, asset_decimals, citadel_decimals)
    norm_in = normalise_amount(asset_amount_in, asset_decimals)
    norm_price = normalise_price(price, asset_decimals)
    return mul_div_down(norm_in, _ten_pow(citadel_decimals), norm_price)


def quote_amount_out(asset_amount_in: int, price: int, discount: int, asset_decimals: int,
                     citadel_decimals: int = CITADEL_DECIMALS) -> int:
    """Citadel base units delivered for `asset_amount_in` (OUT-path: rounded down)."""
    _check_quote_inputs(price, discount, asset_decimals, citadel_decimals)
    norm_in = normalise_amount(asset_amount_in, asset_decimals)
    norm_price = normalise_price(price, asset_decimals)
    num = _ten_pow(citadel_decimals) * (MAX_BPS + discount)
    den = norm_price * MAX_BPS
    out = mul_div_down(norm_in, num, den)
    _dbg(f"quote_out: in={asset_amount_in} norm_in={norm_in} norm_price={norm_price} "
         f"discount={discount} -> out={out}")
    return out


def quote_asset_amount_in(citadel_amount_out: int, price: int, discount: int, asset_decimals: int,
                          citadel_decimals: int = CITADEL_DECIMALS) -> int:
    """Smallest input-asset amount whose forward quote is >= `citadel_amount_out` (IN-path: rounded up)."""
    _check_quote_inputs(price, discount, asset_decimals, citadel_decimals)
    check_units(citadel_amount_out, "citadel_amount_out")
    norm_price = normalise_price(price, asset_decimals)
    num = norm_price * MAX_BPS
    den = _ten_pow(citadel_decimals) * (MAX_BPS + discount)
    norm_in = mul_div_up(citadel_amount_out, num, den)
    asset_in = from_wad_up(norm_in, asset_decimals)
    _dbg(f"quote_in: out={citadel_amount_out} norm_price={norm_price} discount={discount} "
         f"-> norm_in={norm_in} asset_in={asset_in}")
    return asset_in


@dataclass(frozen=True)
class Quote:
    """A priced deposit: inputs plus both the undiscounted and discounted output."""

    asset_amount_in: int
    price: int
    discount: int
    undiscounted_out: int
    amount_out: int


def quote(asset_amount_in: int, price: int, discount: int, asset_decimals: int,
          citadel_decimals: int = CITADEL_DECIMALS) -> Quote:
    return Quote(
        asset_amount_in=asset_amount_in,
        price=price,
        discount=discount,
        undiscounted_out=undiscounted_amount_out(asset_amount_in, price, asset_decimals, citadel_decimals),
        amount_out=quote_amount_out(asset_amount_in, price, discount, asset_decimals, citadel_decimals),
    )


__all__ = [
    "normalise_amount",
    "normalise_price",
    "undiscounted_amount_out",
    "quote_amount_out",
    "quote_asset_amount_in",
    "Quote",
    "quote",
]
