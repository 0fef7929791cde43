"""Walkthrough demo: discount-rate funding sale under its access, pause and pricing rules.

Scenarios covered:
SA) Discount limits (10, 50): set 20, then 60 and 5 are rejected
SB) Limits at (0, 10000) rejected (maxDiscount >= MAX_BPS)
SC) Quote round-trip: discount 0 vs discount d, 18-decimal asset
SD) Deposit with exact pre-funding: contract ends with zero citadel and zero asset
SE) Slippage floor above the quote: rejected, balances unchanged

Extras:
SF) 8-decimal asset (wBTC) vs 18-decimal asset at the same economic price
SG) Out-of-bounds oracle update flags the price and blocks deposits
SH) Global pause beats every role check
"""
from __future__ import annotations

from typing import Callable, List, Optional
import argparse
import sys

from citadel_funding import (
    Funding,
    GlobalAccessControl,
    Token,
    GOVERNANCE_ROLE,
    POLICY_OPERATIONS_ROLE,
    CITADEL_PRICE_IN_ASSET_ORACLE_ROLE,
    TREASURY_OPERATIONS_ROLE,
    FundingError,
)
from citadel_funding.config import deploy_funding, load_config
from citadel_funding.core.fmt import fmt_units, fmt_bps
from citadel_funding.log import setup_logging

E18 = 10 ** 18
E8 = 10 ** 8

# ---------- pretty printers ----------

def brief_state(f: Funding) -> str:
    s = f.funding()
    price = fmt_units(s.citadel_price_in_asset, s.input_asset_decimals, f.asset.symbol) if s.citadel_price_in_asset else "(unset)"
    return (f"discount={fmt_bps(s.discount)} limits=[{fmt_bps(s.min_discount)}, {fmt_bps(s.max_discount)}] "
            f"price={price}/{f.citadel.symbol} flag={s.citadel_price_flag}")


def print_balances(f: Funding, accounts: List[str]) -> None:
    print("- Balances:")
    for acct in accounts:
        a = fmt_units(f.asset.balance_of(acct), f.asset.decimals, f.asset.symbol)
        c = fmt_units(f.citadel.balance_of(acct), f.citadel.decimals, f.citadel.symbol)
        print(f"  • {acct:<12} {a:>24}  {c:>28}")


def attempt(label: str, fn: Callable[[], object]) -> None:
    try:
        res = fn()
        print(f"- {label}: ok" + (f" -> {res}" if res is not None else ""))
    except FundingError as exc:
        print(f"- {label}: REVERT [{type(exc).__name__}] {exc}")


# ---------- deployment ----------

def deploy(asset_symbol: str = "WETH", asset_decimals: int = 18, price: int = 0) -> Funding:
    gac = GlobalAccessControl.with_members({
        GOVERNANCE_ROLE: ["governance"],
        POLICY_OPERATIONS_ROLE: ["policy_ops"],
        CITADEL_PRICE_IN_ASSET_ORACLE_ROLE: ["oracle"],
        TREASURY_OPERATIONS_ROLE: ["treasury_ops"],
    })
    asset = Token(asset_symbol, asset_decimals)
    citadel = Token("CTDL", 18)
    return Funding(gac, asset, citadel, sale_recipient="treasury", citadel_price_in_asset=price)


def fund_buyer(f: Funding, buyer: str, amount: int) -> None:
    f.asset.mint(buyer, amount)
    f.asset.approve(buyer, f.address, amount)


# ---------- scenarios ----------

def scenario_a() -> None:
    f = deploy(price=E18)
    f.set_discount_limits("governance", 10, 50)
    attempt("setDiscount(20)", lambda: f.set_discount("policy_ops", 20))
    attempt("setDiscount(60)", lambda: f.set_discount("policy_ops", 60))
    attempt("setDiscount(5)", lambda: f.set_discount("policy_ops", 5))
    print(f"- State: {brief_state(f)}")


def scenario_b() -> None:
    f = deploy(price=E18)
    attempt("setDiscountLimits(0, 10000)", lambda: f.set_discount_limits("governance", 0, 10000))
    attempt("setDiscountLimits by stranger", lambda: f.set_discount_limits("mallory", 0, 100))


def scenario_c(discount: int) -> None:
    f = deploy(price=2 * E18)
    amount = 10 * E18
    base = f.get_amount_out(amount)
    f.set_discount_limits("governance", 0, 9000)
    f.set_discount("policy_ops", discount)
    marked = f.get_amount_out(amount)
    print(f"- In: {fmt_units(amount, 18, 'WETH')} @ 2 WETH/CTDL")
    print(f"- discount=0      -> {fmt_units(base, 18, 'CTDL')}")
    print(f"- discount={fmt_bps(discount):<6} -> {fmt_units(marked, 18, 'CTDL')}")
    print(f"- asset needed for {fmt_units(marked, 18, 'CTDL')}: {fmt_units(f.get_asset_amount_in(marked), 18, 'WETH')}")


def scenario_d() -> None:
    f = deploy(price=2 * E18)
    amount = 10 * E18
    out = f.get_amount_out(amount)
    f.citadel.mint(f.address, out)
    fund_buyer(f, "alice", amount)
    print_balances(f, ["alice", f.address, "treasury"])
    attempt("deposit(10 WETH, minOut=quote)", lambda: f.deposit("alice", amount, out))
    print_balances(f, ["alice", f.address, "treasury"])


def scenario_e() -> None:
    f = deploy(price=2 * E18)
    amount = 10 * E18
    out = f.get_amount_out(amount)
    f.citadel.mint(f.address, out)
    fund_buyer(f, "bob", amount)
    attempt("deposit(10 WETH, minOut=quote+1)", lambda: f.deposit("bob", amount, out + 1))
    print_balances(f, ["bob", f.address, "treasury"])


def scenario_f() -> None:
    weth = deploy("WETH", 18, price=5 * 10 ** 14)   # 0.0005 WETH / CTDL
    wbtc = deploy("wBTC", 8, price=5 * 10 ** 4)     # 0.0005 wBTC / CTDL
    print(f"- 1 WETH -> {fmt_units(weth.get_amount_out(E18), 18, 'CTDL')}")
    print(f"- 1 wBTC -> {fmt_units(wbtc.get_amount_out(E8), 18, 'CTDL')}")


def scenario_g() -> None:
    f = deploy(price=E18)
    f.set_citadel_price_bounds("policy_ops", E18 // 2, 2 * E18)
    attempt("updatePrice(5 WETH)", lambda: f.update_citadel_price_in_asset("oracle", 5 * E18))
    print(f"- State: {brief_state(f)}")
    f.citadel.mint(f.address, 10 * E18)
    fund_buyer(f, "carol", E18)
    attempt("deposit while flagged", lambda: f.deposit("carol", E18, 0))
    attempt("clearCitadelPriceFlag", lambda: f.clear_citadel_price_flag("policy_ops"))
    attempt("deposit after clear", lambda: f.deposit("carol", E18, 0))


def scenario_h() -> None:
    f = deploy(price=E18)
    f.gate.pause("incident")
    attempt("setDiscount by policy_ops", lambda: f.set_discount("policy_ops", 0))
    attempt("setDiscount by stranger", lambda: f.set_discount("mallory", 0))
    attempt("updatePrice by oracle", lambda: f.update_citadel_price_in_asset("oracle", E18))


def scenario_config(path: str) -> None:
    cfg = load_config(path)
    f = deploy_funding(cfg)
    print(f"- Deployed {f!r} from {path}")
    print(f"- State: {brief_state(f)}")
    one = 10 ** f.asset.decimals
    print(f"- 1 {f.asset.symbol} -> {fmt_units(f.get_amount_out(one), f.citadel.decimals, f.citadel.symbol)}")
    rem: Optional[int] = f.get_remaining_fundable()
    print(f"- Remaining fundable: {'uncapped' if rem is None else fmt_units(rem, f.asset.decimals, f.asset.symbol)}")


# ---------- registry ----------

class Scenario:
    def __init__(self, sid: str, title: str, fn: Callable[[], None]):
        self.sid = sid
        self.title = title
        self.fn = fn

scenarios: List[Scenario] = []

def add(sid: str, title: str, fn: Callable[[], None]) -> None:
    scenarios.append(Scenario(sid, title, fn))


def _split(arg: Optional[str]) -> set:
    return {s.strip() for s in arg.split(",")} if arg else set()


# ---------- run scenarios ----------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Citadel funding sale demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., SA,SD)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    parser.add_argument("--discount", type=int, default=1000, help="Discount (bps) used by scenario SC")
    parser.add_argument("--config", type=str, default=None, help="YAML deployment config to load and quote against")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level for contract events")
    args = parser.parse_args(sys.argv[1:])

    setup_logging(args.log_level)

    add("SA", "SA) Discount limits (10, 50): 20 ok, 60 and 5 rejected", scenario_a)
    add("SB", "SB) Limits (0, 10000) rejected", scenario_b)
    add("SC", f"SC) Quote with discount 0 vs {args.discount} bps", lambda: scenario_c(args.discount))
    add("SD", "SD) Deposit with exact pre-funding", scenario_d)
    add("SE", "SE) Slippage floor above quote", scenario_e)
    add("SF", "SF) 8- vs 18-decimal asset at the same price", scenario_f)
    add("SG", "SG) Price bounds and flag", scenario_g)
    add("SH", "SH) Pause precedence", scenario_h)
    if args.config:
        add("CFG", f"CFG) Deployment from {args.config}", lambda: scenario_config(args.config))

    only = _split(args.only)
    skip = _split(args.skip)
    for sc in scenarios:
        if only and sc.sid not in only:
            continue
        if sc.sid in skip:
            continue
        print("\n" + "=" * 80)
        print(f"Scenario: {sc.title}")
        sc.fn()
