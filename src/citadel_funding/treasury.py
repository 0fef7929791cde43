"""
TreasuryRouting — input asset never rests in the funding contract.

`route_received` stages the forward of freshly pulled asset to the sale
recipient inside the caller's TransferBatch, so pull and forward commit (or
fail) together. `sweep_all` is the recovery path for balances that reached the
contract outside a deposit (direct transfers, airdrops).
"""

from __future__ import annotations

from typing import Optional

from .core.datatypes import FundingState
from .core.exc import AmountDomainError
from .ledger import TokenLike, TransferBatch


class TreasuryRouting:
    """Stateless forwarding from `holder` to the state's sale recipient."""

    def __init__(self, holder: str, state: FundingState) -> None:
        self.holder = holder
        self.state = state

    @property
    def sale_recipient(self) -> str:
        return self.state.sale_recipient

    def route_received(self, batch: TransferBatch, asset: TokenLike, amount: int) -> None:
        batch.stage(asset, self.holder, self.sale_recipient, amount)

    def sweep_all(self, batch: TransferBatch, token: TokenLike) -> int:
        """Stage the holder's whole balance of `token` to the recipient; returns the amount."""
        amount = token.balance_of(self.holder)
        if amount > 0:
            batch.stage(token, self.holder, self.sale_recipient, amount)
        return amount


def check_recipient(recipient: str, holder: Optional[str] = None) -> str:
    if not recipient:
        raise AmountDomainError("sale recipient must not be the empty address")
    if holder is not None and recipient == holder:
        raise AmountDomainError("sale recipient must not be the funding contract")
    return recipient


__all__ = ["TreasuryRouting", "check_recipient"]
