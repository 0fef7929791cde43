"""
Funding — discount-rate token sale (integer domain).

Buyers deposit an input asset and receive citadel at the oracle price marked
up by the current discount. Every mutating entrypoint runs the same gate:

  1. pause check          -> SystemPaused
  2. capability check     -> AccessDenied (carries the required role)
  3. value checks         -> LimitInvalid / BelowMinimum / AboveMaximum / ...
  4. mutation, or staged transfers committed as one batch

Nothing is written before all checks pass, and a failed batch leaves every
balance untouched, so each call is all-or-nothing.

Status:
  The contract must be pre-funded with citadel by an upstream minting flow.
  Input asset is forwarded to `sale_recipient` in the same batch that pulls it,
  so the contract's input-asset balance is unchanged by a deposit.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, List, Optional

from .access import (
    Authorizer,
    require_public,
    require_role,
)
from .core.amounts import check_decimals, check_units
from .core.constants import (
    GOVERNANCE_ROLE,
    MAX_BPS,
    POLICY_OPERATIONS_ROLE,
    TREASURY_OPERATIONS_ROLE,
)
from .core.datatypes import Event, FundingParams, FundingState
from .core.exc import (
    AboveMaximum,
    AmountDomainError,
    AssetCapExceeded,
    FundingError,
    BelowMinimum,
    InsufficientOutputLiquidity,
    InvariantViolation,
    LimitInvalid,
    PriceFlagged,
    PriceNotSet,
    SlippageExceeded,
    ZeroAmount,
)
from .core.fmt import fmt_event
from .discount import DiscountRateManager, check_bps
from .ledger import TokenLike, TransferBatch
from .log import get_logger
from .oracle import PriceOracleFeed
from .pricing import quote_amount_out, quote_asset_amount_in
from .treasury import TreasuryRouting, check_recipient

logger = get_logger(__name__)


def _logs_reverts(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Log a rejected entrypoint call at DEBUG, then let the error propagate."""
    @functools.wraps(fn)
    def wrapper(self: "Funding", caller: str, *args: Any, **kwargs: Any) -> Any:
        try:
            return fn(self, caller, *args, **kwargs)
        except (FundingError, AmountDomainError) as exc:
            logger.debug("revert %s caller=%s error=%s reason=%s",
                         fn.__name__, caller, type(exc).__name__, exc)
            raise
    return wrapper


class Funding:
    """One deployed sale: input `asset` in, `citadel` out."""

    def __init__(self,
                 gac: Authorizer,
                 asset: TokenLike,
                 citadel: TokenLike,
                 *,
                 sale_recipient: str,
                 address: str = "funding",
                 citadel_price_in_asset: int = 0,
                 min_discount: int = 0,
                 max_discount: int = 0,
                 discount: int = 0,
                 discount_manager: Optional[str] = None,
                 asset_cap: Optional[int] = None,
                 min_citadel_price_in_asset: int = 0,
                 max_citadel_price_in_asset: int = 0) -> None:
        check_decimals(asset.decimals)
        check_decimals(citadel.decimals)
        if asset is citadel:
            raise AmountDomainError("input asset and citadel must be distinct tokens")
        check_units(citadel_price_in_asset, "citadel_price_in_asset")
        check_bps(min_discount, "minDiscount")
        check_bps(max_discount, "maxDiscount")
        check_bps(discount, "discount")
        if max_discount >= MAX_BPS:
            raise LimitInvalid("maxDiscount >= MAX_BPS")
        if not 0 <= min_discount <= max_discount:
            raise LimitInvalid("minDiscount > maxDiscount")
        if discount < min_discount:
            raise BelowMinimum()
        if discount > max_discount:
            raise AboveMaximum()
        if asset_cap is not None:
            check_units(asset_cap, "asset_cap")
        if max_citadel_price_in_asset and min_citadel_price_in_asset > max_citadel_price_in_asset:
            raise LimitInvalid("minPrice > maxPrice")

        self.gate = gac
        self.asset = asset
        self.citadel = citadel
        self.address = address
        self.events: List[Event] = []

        self.state = FundingState(
            input_asset_decimals=asset.decimals,
            sale_recipient=check_recipient(sale_recipient, address),
            discount=discount,
            min_discount=min_discount,
            max_discount=max_discount,
            citadel_price_in_asset=citadel_price_in_asset,
            discount_manager=discount_manager,
            asset_cap=asset_cap,
            min_citadel_price_in_asset=min_citadel_price_in_asset,
            max_citadel_price_in_asset=max_citadel_price_in_asset,
        )
        self.discounts = DiscountRateManager(self.state, gac, self._emit)
        self.oracle = PriceOracleFeed(self.state, gac, self._emit)
        self.treasury = TreasuryRouting(address, self.state)
        logger.info(
            "Funding deployed address=%s asset=%s citadel=%s recipient=%s",
            address, asset.symbol, citadel.symbol, sale_recipient,
        )

    def __repr__(self) -> str:
        return f"Funding({self.address}, {self.asset.symbol}->{self.citadel.symbol})"

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _emit(self, name: str, **args: Any) -> None:
        ev = Event(name, dict(args))
        self.events.append(ev)
        logger.info(fmt_event(name, args))

    def events_named(self, name: str) -> List[Event]:
        return [e for e in self.events if e.name == name]

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def funding(self) -> FundingParams:
        """Snapshot of the full funding state."""
        return self.state.snapshot()

    def get_amount_out(self, asset_amount_in: int) -> int:
        """Citadel delivered for `asset_amount_in` at the current price and discount."""
        self._require_price()
        return quote_amount_out(
            asset_amount_in,
            self.state.citadel_price_in_asset,
            self.state.discount,
            self.state.input_asset_decimals,
            self.citadel.decimals,
        )

    def get_asset_amount_in(self, citadel_amount_out: int) -> int:
        """Smallest deposit whose quote covers `citadel_amount_out` (rounded up)."""
        self._require_price()
        return quote_asset_amount_in(
            citadel_amount_out,
            self.state.citadel_price_in_asset,
            self.state.discount,
            self.state.input_asset_decimals,
            self.citadel.decimals,
        )

    def get_remaining_fundable(self) -> Optional[int]:
        return self.state.remaining_fundable()

    def citadel_liquidity(self) -> int:
        return self.citadel.balance_of(self.address)

    def _require_price(self) -> None:
        if not self.state.price_initialised():
            raise PriceNotSet()

    # ------------------------------------------------------------------
    # Discount (governance / policy operations)
    # ------------------------------------------------------------------

    @_logs_reverts
    def set_discount_limits(self, caller: str, min_discount: int, max_discount: int) -> None:
        self.discounts.set_discount_limits(caller, min_discount, max_discount)

    @_logs_reverts
    def set_discount(self, caller: str, discount: int) -> None:
        self.discounts.set_discount(caller, discount)

    @_logs_reverts
    def set_discount_manager(self, caller: str, discount_manager: Optional[str]) -> None:
        self.discounts.set_discount_manager(caller, discount_manager)

    # ------------------------------------------------------------------
    # Oracle
    # ------------------------------------------------------------------

    @_logs_reverts
    def update_citadel_price_in_asset(self, caller: str, price: int) -> bool:
        return self.oracle.update_citadel_price_in_asset(caller, price)

    @_logs_reverts
    def set_citadel_price_bounds(self, caller: str, min_price: int, max_price: int) -> None:
        self.oracle.set_citadel_price_bounds(caller, min_price, max_price)

    @_logs_reverts
    def clear_citadel_price_flag(self, caller: str) -> None:
        self.oracle.clear_citadel_price_flag(caller)

    # ------------------------------------------------------------------
    # Sale configuration
    # ------------------------------------------------------------------

    @_logs_reverts
    def set_asset_cap(self, caller: str, asset_cap: int) -> None:
        """Set the funding cap. It may not drop below what has already been funded."""
        require_role(self.gate, POLICY_OPERATIONS_ROLE, caller)
        check_units(asset_cap, "asset_cap")
        funded = self.state.asset_cumulative_funded
        if asset_cap < funded:
            raise AssetCapExceeded(
                funded, asset_cap,
                reason="cannot decrease cap below global sum of assets in",
            )
        self.state.asset_cap = asset_cap
        self._emit("AssetCapUpdated", assetCap=asset_cap)

    @_logs_reverts
    def set_sale_recipient(self, caller: str, sale_recipient: str) -> None:
        require_role(self.gate, GOVERNANCE_ROLE, caller)
        self.state.sale_recipient = check_recipient(sale_recipient, self.address)
        self._emit("SaleRecipientUpdated", recipient=sale_recipient)

    @_logs_reverts
    def sweep(self, caller: str, token: TokenLike) -> int:
        """Forward the contract's whole balance of `token` to the sale recipient."""
        require_role(self.gate, TREASURY_OPERATIONS_ROLE, caller)
        batch = TransferBatch()
        amount = self.treasury.sweep_all(batch, token)
        batch.commit()
        self._emit("Sweep", token=token.symbol, amount=amount, recipient=self.state.sale_recipient)
        return amount

    # ------------------------------------------------------------------
    # Swap
    # ------------------------------------------------------------------

    @_logs_reverts
    def deposit(self, caller: str, asset_amount_in: int, min_amount_out: int) -> int:
        """Exchange `asset_amount_in` of the input asset for citadel.

        Requires prior `asset.approve(caller, funding.address, asset_amount_in)`.
        Returns the citadel amount delivered.
        """
        require_public(self.gate, caller)
        if self.state.citadel_price_flag:
            raise PriceFlagged()
        check_units(asset_amount_in, "asset_amount_in")
        check_units(min_amount_out, "min_amount_out")
        if asset_amount_in == 0:
            raise ZeroAmount()
        self._require_price()

        remaining = self.state.remaining_fundable()
        if remaining is not None and asset_amount_in > remaining:
            raise AssetCapExceeded(asset_amount_in, remaining)

        amount_out = self.get_amount_out(asset_amount_in)
        if amount_out < min_amount_out:
            raise SlippageExceeded(amount_out, min_amount_out)

        available = self.citadel.balance_of(self.address)
        if available < amount_out:
            raise InsufficientOutputLiquidity(amount_out, available)

        batch = TransferBatch()
        batch.stage(self.asset, caller, self.address, asset_amount_in, spender=self.address)
        self.treasury.route_received(batch, self.asset, asset_amount_in)
        batch.stage(self.citadel, self.address, caller, amount_out)
        retained = batch.net_change(self.asset, self.address)
        if retained != 0:
            batch.discard()
            raise InvariantViolation(f"funding would retain {retained} of input asset after deposit")
        batch.commit()

        self.state.asset_cumulative_funded += asset_amount_in
        self._emit(
            "Deposit",
            buyer=caller,
            assetIn=asset_amount_in,
            citadelOut=amount_out,
            discount=self.state.discount,
            price=self.state.citadel_price_in_asset,
        )
        return amount_out


__all__ = ["Funding"]
