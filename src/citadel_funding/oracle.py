"""
PriceOracleFeed — the price slot inside the funding state.

The oracle role pushes `citadel_price_in_asset`. Updates are screened:
  - zero is rejected outright (InvalidPrice), so an initialised price can
    never return to zero;
  - a price outside [min, max] bounds (0 = unbounded on that side) does not
    replace the stored price. It raises the price flag instead, which blocks
    deposits until policy operations clears it.
"""

from __future__ import annotations

from typing import Callable

from .access import Authorizer, require_role
from .core.amounts import check_units
from .core.constants import CITADEL_PRICE_IN_ASSET_ORACLE_ROLE, POLICY_OPERATIONS_ROLE
from .core.datatypes import FundingState
from .core.exc import InvalidPrice, LimitInvalid
from .log import get_logger

logger = get_logger(__name__)

EmitFn = Callable[..., None]


class PriceOracleFeed:

    def __init__(self, state: FundingState, gate: Authorizer, emit: EmitFn) -> None:
        self.state = state
        self.gate = gate
        self._emit = emit

    def within_bounds(self, price: int) -> bool:
        lo = self.state.min_citadel_price_in_asset
        hi = self.state.max_citadel_price_in_asset
        if lo and price < lo:
            return False
        if hi and price > hi:
            return False
        return True

    def update_citadel_price_in_asset(self, caller: str, price: int) -> bool:
        """Push a new price. Returns True if stored, False if it was flagged instead."""
        require_role(self.gate, CITADEL_PRICE_IN_ASSET_ORACLE_ROLE, caller)
        check_units(price, "price")
        if price == 0:
            raise InvalidPrice()

        if not self.within_bounds(price):
            self.state.citadel_price_flag = True
            self._emit(
                "CitadelPriceFlag",
                price=price,
                minPrice=self.state.min_citadel_price_in_asset,
                maxPrice=self.state.max_citadel_price_in_asset,
            )
            return False

        self.state.citadel_price_in_asset = price
        self._emit("CitadelPriceInAssetUpdated", price=price)
        return True

    def set_citadel_price_bounds(self, caller: str, min_price: int, max_price: int) -> None:
        require_role(self.gate, POLICY_OPERATIONS_ROLE, caller)
        check_units(min_price, "min_price")
        check_units(max_price, "max_price")
        if max_price and min_price > max_price:
            raise LimitInvalid("minPrice > maxPrice")
        self.state.min_citadel_price_in_asset = min_price
        self.state.max_citadel_price_in_asset = max_price
        self._emit("CitadelPriceBoundsSet", minPrice=min_price, maxPrice=max_price)

    def clear_citadel_price_flag(self, caller: str) -> None:
        require_role(self.gate, POLICY_OPERATIONS_ROLE, caller)
        self.state.citadel_price_flag = False
        self._emit("CitadelPriceFlagCleared")


__all__ = ["PriceOracleFeed"]
