"""
Token ledger collaborators (integer domain).

- `Token`: in-memory ERC20-style token (balances, allowances, decimals).
- `TransferBatch`: stages the transfers of one entrypoint call and commits them
  all-or-nothing. Balances and allowances for the whole batch are validated
  (in staging order, so a credit earlier in the batch can fund a later debit)
  before the first transfer executes.

The funding core only relies on the `TokenLike` surface, so a token adapter for
another backend can be passed instead of `Token`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

from .core.amounts import check_decimals, check_units
from .core.exc import AmountDomainError, InsufficientAllowance, InsufficientBalance
from .log import get_logger

logger = get_logger(__name__)

# Debug printing control
DEBUG_LEDGER = False

def _dbg(msg: str) -> None:
    if DEBUG_LEDGER:
        print(f"[LEDGER] {msg}")


class TokenLike(Protocol):
    symbol: str
    decimals: int

    def balance_of(self, account: str) -> int:
        ...

    def allowance(self, owner: str, spender: str) -> int:
        ...

    def transfer(self, sender: str, to: str, amount: int) -> None:
        ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        ...


# ----------------------------
# In-memory token
# ----------------------------

class Token:
    """ERC20-style token with integer base-unit balances (non-negative domain)."""

    def __init__(self, symbol: str, decimals: int, name: Optional[str] = None) -> None:
        self.symbol = symbol
        self.name = name or symbol
        self.decimals = check_decimals(decimals)
        self.total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}

    def __repr__(self) -> str:
        return f"Token({self.symbol}, decimals={self.decimals})"

    # --- views ---
    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    # --- mutations ---
    def mint(self, to: str, amount: int) -> None:
        check_units(amount, "mint amount")
        _require_account(to)
        self._balances[to] = self.balance_of(to) + amount
        self.total_supply += amount
        _dbg(f"{self.symbol} mint to={to} amount={amount}")

    def approve(self, owner: str, spender: str, amount: int) -> None:
        check_units(amount, "approve amount")
        _require_account(spender)
        self._allowances[(owner, spender)] = amount
        _dbg(f"{self.symbol} approve owner={owner} spender={spender} amount={amount}")

    def transfer(self, sender: str, to: str, amount: int) -> None:
        check_units(amount, "transfer amount")
        _require_account(to)
        have = self.balance_of(sender)
        if have < amount:
            raise InsufficientBalance(self.symbol, sender, amount, have)
        self._balances[sender] = have - amount
        self._balances[to] = self.balance_of(to) + amount
        _dbg(f"{self.symbol} transfer {sender}->{to} amount={amount}")

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        check_units(amount, "transfer amount")
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(self.symbol, owner, spender, amount, allowed)
        # Balance is checked by transfer(); allowance is only consumed on success.
        self.transfer(owner, to, amount)
        self._allowances[(owner, spender)] = allowed - amount


def _require_account(account: str) -> None:
    if not account:
        raise AmountDomainError("transfer to the empty address")


# ----------------------------
# Staged transfers
# ----------------------------

@dataclass(frozen=True)
class Transfer:
    """One staged movement. `spender` set means an allowance-based pull."""

    token: TokenLike
    src: str
    dst: str
    amount: int
    spender: Optional[str] = None


@dataclass
class TransferBatch:
    """Stage transfers for one call; `commit()` validates then executes them all.

    Zero-amount transfers are kept (they are valid ERC20 calls) but never
    fail validation.
    """

    staged: List[Transfer] = field(default_factory=list)

    def stage(self, token: TokenLike, src: str, dst: str, amount: int,
              *, spender: Optional[str] = None) -> None:
        check_units(amount, "staged amount")
        if not dst:
            raise AmountDomainError("staged transfer to the empty address")
        self.staged.append(Transfer(token, src, dst, amount, spender))

    def validate(self) -> Dict[Tuple[int, str], int]:
        """Replay the batch on shadow balances; raise the first failure found.

        Returns the net balance change per (id(token), account) the batch
        would apply, so callers can check post-conditions before committing.
        """
        balances: Dict[Tuple[int, str], int] = {}
        allowances: Dict[Tuple[int, str, str], int] = {}
        deltas: Dict[Tuple[int, str], int] = {}

        def bal(t: Transfer, account: str) -> int:
            key = (id(t.token), account)
            if key not in balances:
                balances[key] = t.token.balance_of(account)
            return balances[key]

        for t in self.staged:
            if t.spender is not None:
                akey = (id(t.token), t.src, t.spender)
                allowed = allowances.get(akey)
                if allowed is None:
                    allowed = t.token.allowance(t.src, t.spender)
                if allowed < t.amount:
                    raise InsufficientAllowance(t.token.symbol, t.src, t.spender, t.amount, allowed)
                allowances[akey] = allowed - t.amount
            have = bal(t, t.src)
            if have < t.amount:
                raise InsufficientBalance(t.token.symbol, t.src, t.amount, have)
            src_key = (id(t.token), t.src)
            dst_key = (id(t.token), t.dst)
            balances[src_key] = have - t.amount
            balances[dst_key] = bal(t, t.dst) + t.amount
            deltas[src_key] = deltas.get(src_key, 0) - t.amount
            deltas[dst_key] = deltas.get(dst_key, 0) + t.amount
        return deltas

    def net_change(self, token: TokenLike, account: str) -> int:
        """Validate the batch and return `account`'s net change in `token`."""
        return self.validate().get((id(token), account), 0)

    def commit(self) -> None:
        self.validate()
        for t in self.staged:
            if t.spender is not None:
                t.token.transfer_from(t.spender, t.src, t.dst, t.amount)
            else:
                t.token.transfer(t.src, t.dst, t.amount)
            logger.debug("Transfer token=%s from=%s to=%s amount=%s",
                         t.token.symbol, t.src, t.dst, t.amount)
        self.staged.clear()

    def discard(self) -> None:
        self.staged.clear()


__all__ = [
    "TokenLike",
    "Token",
    "Transfer",
    "TransferBatch",
]
