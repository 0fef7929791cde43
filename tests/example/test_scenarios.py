# tests/example/test_scenarios.py
# Story-style walkthroughs of the sale (Alice/Bob/Carol etc.).
# Each test is one operator or buyer story, end to end, with a printed trail.

import pytest

from citadel_funding.core.constants import MAX_BPS
from citadel_funding.core.exc import (
    AboveMaximum,
    BelowMinimum,
    LimitInvalid,
    SlippageExceeded,
    SystemPaused,
)
from citadel_funding.core.fmt import fmt_bps, fmt_units

from conftest import (
    E18,
    GOVERNANCE,
    ORACLE,
    POLICY_OPS,
    RECIPIENT,
    TREASURY_OPS,
    fund_buyer,
    make_funding,
    snapshot_balances,
)


# Governance narrows the discount to (10, 50); ops can move inside it only.
def test_story_ops_discount_inside_governance_limits():
    f = make_funding()
    f.set_discount_limits(GOVERNANCE, 10, 50)
    f.set_discount(POLICY_OPS, 20)
    print(f"[limits 0.1%..0.5%] set {fmt_bps(20)} -> ok")
    with pytest.raises(AboveMaximum) as hi:
        f.set_discount(POLICY_OPS, 60)
    with pytest.raises(BelowMinimum) as lo:
        f.set_discount(POLICY_OPS, 5)
    print(f"  60 -> {hi.value.reason} | 5 -> {lo.value.reason}")
    assert str(hi.value) == "discount > maxDiscount"
    assert str(lo.value) == "discount < minDiscount"
    assert f.funding().discount == 20


# Governance tries to allow a 100% discount.
def test_story_full_discount_limit_refused():
    f = make_funding()
    with pytest.raises(LimitInvalid) as ei:
        f.set_discount_limits(GOVERNANCE, 0, MAX_BPS)
    print("[limits 0..10000] ->", ei.value.reason)
    assert str(ei.value) == "maxDiscount >= MAX_BPS"
    assert (f.funding().min_discount, f.funding().max_discount) == (0, 0)


# Alice checks what a discount buys her before depositing.
@pytest.mark.parametrize("d", [0, 100, 1000, 2500])
def test_story_alice_compares_quotes(d):
    f = make_funding(price=2 * E18, max_discount=5000)
    base = f.get_amount_out(10 * E18)
    f.set_discount(POLICY_OPS, d)
    got = f.get_amount_out(10 * E18)
    print(f"[alice] 10 WETH @2: discount 0 -> {fmt_units(base, 18)} | {fmt_bps(d)} -> {fmt_units(got, 18)}")
    assert base == 5 * E18
    assert got == base * (MAX_BPS + d) // MAX_BPS


# Bob deposits against a contract funded with exactly his quote.
def test_story_bob_exact_prefunded_deposit():
    f = make_funding(price=2 * E18)
    out = f.get_amount_out(10 * E18)
    f.citadel.mint(f.address, out)
    fund_buyer(f, "bob", 10 * E18)
    f.deposit("bob", 10 * E18, out)
    bal = snapshot_balances(f, "bob", f.address, RECIPIENT)
    print("[bob] after deposit ->", bal)
    assert bal[("CTDL", "bob")] == out
    assert bal[("CTDL", f.address)] == 0
    assert bal[("WETH", f.address)] == 0
    assert bal[("WETH", RECIPIENT)] == 10 * E18


# Carol asks for one base unit more than the quote.
def test_story_carol_slippage_floor():
    f = make_funding(price=2 * E18)
    out = f.get_amount_out(10 * E18)
    f.citadel.mint(f.address, out)
    fund_buyer(f, "carol", 10 * E18)
    before = snapshot_balances(f, "carol", f.address, RECIPIENT)
    with pytest.raises(SlippageExceeded) as ei:
        f.deposit("carol", 10 * E18, out + 1)
    print("[carol] ->", ei.value)
    assert snapshot_balances(f, "carol", f.address, RECIPIENT) == before


# An incident: the oracle misfires, then the guardian pauses everything.
def test_story_incident_flag_pause_and_recovery():
    f = make_funding(price=E18)
    f.citadel.mint(f.address, 100 * E18)
    fund_buyer(f, "dave", 10 * E18)
    f.set_citadel_price_bounds(POLICY_OPS, E18 // 2, 2 * E18)

    assert f.update_citadel_price_in_asset(ORACLE, 50 * E18) is False
    print("[incident] oracle pushed 50x price -> flagged:", f.funding().citadel_price_flag)

    f.gate.pause("oracle incident")
    with pytest.raises(SystemPaused):
        f.clear_citadel_price_flag(POLICY_OPS)
    f.gate.unpause()

    f.clear_citadel_price_flag(POLICY_OPS)
    got = f.deposit("dave", 10 * E18, 10 * E18)
    print(f"[incident] recovered; dave got {fmt_units(got, 18, 'CTDL')} at the last good price")
    assert got == 10 * E18

    left = f.sweep(TREASURY_OPS, f.citadel)
    assert left == 90 * E18
    assert f.citadel.balance_of(RECIPIENT) == 90 * E18
    names = [e.name for e in f.events]
    print("[incident] events:", names)
    assert names == [
        "CitadelPriceBoundsSet",
        "CitadelPriceFlag",
        "CitadelPriceFlagCleared",
        "Deposit",
        "Sweep",
    ]
