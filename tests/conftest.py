from __future__ import annotations

from typing import Callable

import pytest

# Import project primitives
from citadel_funding import (
    Funding,
    GlobalAccessControl,
    Token,
    GOVERNANCE_ROLE,
    POLICY_OPERATIONS_ROLE,
    CITADEL_PRICE_IN_ASSET_ORACLE_ROLE,
    TREASURY_OPERATIONS_ROLE,
)


E18 = 10 ** 18
E8 = 10 ** 8

GOVERNANCE = "governance"
POLICY_OPS = "policy_ops"
ORACLE = "oracle"
TREASURY_OPS = "treasury_ops"
RECIPIENT = "treasury"


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def make_gac() -> GlobalAccessControl:
    return GlobalAccessControl.with_members({
        GOVERNANCE_ROLE: [GOVERNANCE],
        POLICY_OPERATIONS_ROLE: [POLICY_OPS],
        CITADEL_PRICE_IN_ASSET_ORACLE_ROLE: [ORACLE],
        TREASURY_OPERATIONS_ROLE: [TREASURY_OPS],
    })


def make_funding(asset_decimals: int = 18, price: int = E18, **kwargs) -> Funding:
    """Deploy a Funding over fresh tokens; `price` is asset base units per whole CTDL."""
    asset = Token("WBTC" if asset_decimals == 8 else "WETH", asset_decimals)
    citadel = Token("CTDL", 18)
    return Funding(make_gac(), asset, citadel, sale_recipient=RECIPIENT,
                   citadel_price_in_asset=price, **kwargs)


def fund_buyer(f: Funding, buyer: str, amount: int) -> None:
    """Mint `amount` of the input asset to `buyer` and approve the funding contract."""
    f.asset.mint(buyer, amount)
    f.asset.approve(buyer, f.address, amount)


def snapshot_balances(f: Funding, *accounts: str) -> dict:
    return {
        (tok.symbol, a): tok.balance_of(a)
        for tok in (f.asset, f.citadel)
        for a in accounts
    }


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def gac() -> GlobalAccessControl:
    return make_gac()


@pytest.fixture()
def funding() -> Funding:
    """18-decimal asset, price = 1 asset per CTDL, limits (0, 0), no cap."""
    return make_funding()


@pytest.fixture()
def funding_wbtc() -> Funding:
    """8-decimal asset, price = 0.0005 WBTC per CTDL."""
    return make_funding(asset_decimals=8, price=50_000)


@pytest.fixture()
def prefunded() -> Callable[..., Funding]:
    """Factory: a Funding holding exactly the quote for `amount_in`, buyer funded and approved."""
    def _make(amount_in: int = 10 * E18, buyer: str = "alice", extra_out: int = 0, **kwargs) -> Funding:
        f = make_funding(**kwargs)
        f.citadel.mint(f.address, f.get_amount_out(amount_in) + extra_out)
        fund_buyer(f, buyer, amount_in)
        return f
    return _make
