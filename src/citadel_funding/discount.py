"""
DiscountRateManager — the discount and its admissible range.

Governance owns the range (`set_discount_limits`), policy operations (or the
configured discount manager address) own the value (`set_discount`).

Tightening the range does **not** clamp the stored discount: a discount left
outside the new range stays in effect until the next `set_discount`, which must
then satisfy the new range. `FundingState.discount_in_range()` exposes this.
"""

from __future__ import annotations

from typing import Callable, Optional

from .access import Authorizer, require_role, require_role_or_address
from .core.constants import GOVERNANCE_ROLE, MAX_BPS, POLICY_OPERATIONS_ROLE
from .core.datatypes import FundingState
from .core.exc import AboveMaximum, BelowMinimum, LimitInvalid
from .log import get_logger

logger = get_logger(__name__)

EmitFn = Callable[..., None]


def check_bps(value: int, what: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise LimitInvalid(f"{what} must be a non-negative integer bps value")


class DiscountRateManager:
    """Bounded discount with a governance/ops role split."""

    def __init__(self, state: FundingState, gate: Authorizer, emit: EmitFn) -> None:
        self.state = state
        self.gate = gate
        self._emit = emit

    def set_discount_limits(self, caller: str, min_discount: int, max_discount: int) -> None:
        require_role(self.gate, GOVERNANCE_ROLE, caller)
        check_bps(min_discount, "minDiscount")
        check_bps(max_discount, "maxDiscount")
        if max_discount >= MAX_BPS:
            raise LimitInvalid("maxDiscount >= MAX_BPS")
        if min_discount > max_discount:
            raise LimitInvalid("minDiscount > maxDiscount")

        self.state.min_discount = min_discount
        self.state.max_discount = max_discount
        if not self.state.discount_in_range():
            logger.warning(
                "discount=%s left outside new limits [%s, %s] until next setDiscount",
                self.state.discount, min_discount, max_discount,
            )
        self._emit("DiscountLimitsSet", minDiscount=min_discount, maxDiscount=max_discount)

    def set_discount(self, caller: str, discount: int) -> None:
        require_role_or_address(self.gate, POLICY_OPERATIONS_ROLE, caller,
                                self.state.discount_manager)
        if not isinstance(discount, int) or isinstance(discount, bool):
            raise LimitInvalid("discount must be an integer bps value")
        if discount < self.state.min_discount:
            raise BelowMinimum()
        if discount > self.state.max_discount:
            raise AboveMaximum()

        self.state.discount = discount
        self._emit("DiscountSet", discount=discount)

    def set_discount_manager(self, caller: str, discount_manager: Optional[str]) -> None:
        require_role(self.gate, GOVERNANCE_ROLE, caller)
        self.state.discount_manager = discount_manager or None
        self._emit("DiscountManagerSet", discountManager=self.state.discount_manager)


__all__ = ["DiscountRateManager", "check_bps"]
