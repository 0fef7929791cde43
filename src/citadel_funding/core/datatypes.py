"""
Core datatypes for the funding sale, integer domain.

`FundingState` is the single owned, mutable record of a Funding instance; only
the Funding entrypoints write to it. `FundingParams` is the immutable snapshot
handed to readers. `Event` is the structured log line emitted on every
successful state change.

Notes:
- Discounts and limits are basis points (see constants.MAX_BPS).
- Prices are input-asset base units per one whole output token.
- A zero price bound means "unbounded" on that side.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, astuple
from typing import Any, Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Funding state
# ---------------------------------------------------------------------------

@dataclass
class FundingState:
    """Owned state of one Funding deployment.

    Fields:
    - discount: current markup in bps applied in the buyer's favour.
    - min_discount / max_discount: admissible discount range in bps.
    - citadel_price_in_asset: latest accepted oracle price (0 until initialised).
    - input_asset_decimals: precision of the input asset, fixed at construction.
    - sale_recipient: address receiving swapped-in asset.
    - discount_manager: optional address allowed to call set_discount.
    - asset_cap / asset_cumulative_funded: funding cap (None = uncapped) and running total (asset units).
    - min/max_citadel_price_in_asset: oracle sanity bounds (0 = unbounded).
    - citadel_price_flag: raised when an oracle update fell outside the bounds.
    """

    input_asset_decimals: int
    sale_recipient: str
    discount: int = 0
    min_discount: int = 0
    max_discount: int = 0
    citadel_price_in_asset: int = 0
    discount_manager: Optional[str] = None
    asset_cap: Optional[int] = None
    asset_cumulative_funded: int = 0
    min_citadel_price_in_asset: int = 0
    max_citadel_price_in_asset: int = 0
    citadel_price_flag: bool = False

    def price_initialised(self) -> bool:
        return self.citadel_price_in_asset > 0

    def discount_in_range(self) -> bool:
        """True if the stored discount satisfies the current limits.

        Tightening limits does not clamp a stored discount, so this can be
        False between a set_discount_limits and the next set_discount.
        """
        return self.min_discount <= self.discount <= self.max_discount

    def remaining_fundable(self) -> Optional[int]:
        """Asset units still accepted before the cap; None when uncapped."""
        if self.asset_cap is None:
            return None
        if self.asset_cumulative_funded >= self.asset_cap:
            return 0
        return self.asset_cap - self.asset_cumulative_funded

    def snapshot(self) -> "FundingParams":
        return FundingParams(**{f.name: getattr(self, f.name) for f in fields(self)})


@dataclass(frozen=True)
class FundingParams:
    """Immutable view of FundingState returned by Funding.funding()."""

    input_asset_decimals: int
    sale_recipient: str
    discount: int
    min_discount: int
    max_discount: int
    citadel_price_in_asset: int
    discount_manager: Optional[str]
    asset_cap: Optional[int]
    asset_cumulative_funded: int
    min_citadel_price_in_asset: int
    max_citadel_price_in_asset: int
    citadel_price_flag: bool

    def as_tuple(self) -> Tuple[Any, ...]:
        return astuple(self)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    """A state-change record (name + payload), in emission order."""

    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.args[key]


__all__ = [
    "FundingState",
    "FundingParams",
    "Event",
]
