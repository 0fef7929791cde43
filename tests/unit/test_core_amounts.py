import pytest
from decimal import Decimal

from citadel_funding.core.amounts import (
    TokenAmount,
    mul_div_down,
    mul_div_up,
    to_wad,
    from_wad_down,
    from_wad_up,
    decimal_from_units,
    units_from_decimal_in,
    units_from_decimal_out,
    check_decimals,
)
from citadel_funding.core.exc import AmountDomainError, InvariantViolation
from citadel_funding.core.constants import WAD, MAX_ASSET_DECIMALS


# -----------------------------
# Directional integer rounding
# -----------------------------

def test_mul_div_rounding_down_up():
    print("[mul_div] 10 * 1 / 3: expect down=3, up=4")
    assert mul_div_down(10, 1, 3) == 3
    assert mul_div_up(10, 1, 3) == 4
    print("exact division: 9 * 1 / 3 -> both 3")
    assert mul_div_down(9, 1, 3) == mul_div_up(9, 1, 3) == 3


@pytest.mark.parametrize("fn", [mul_div_down, mul_div_up])
def test_mul_div_zero_denominator_raises(fn):
    print(f"[{fn.__name__}-zero-den] expect ZeroDivisionError")
    with pytest.raises(ZeroDivisionError):
        fn(1, 1, 0)


@pytest.mark.parametrize("fn", [mul_div_down, mul_div_up])
def test_mul_div_negative_operand_raises(fn):
    print(f"[{fn.__name__}-negative] expect AmountDomainError (non-negative domain)")
    with pytest.raises(AmountDomainError):
        fn(-1, 1, 1)


# -----------------------------
# WAD normalisation
# -----------------------------

@pytest.mark.parametrize("decimals,units", [(18, 1), (8, 1), (6, 1_000_000), (0, 7)])
def test_to_wad_is_exact_and_reversible(decimals, units):
    wad = to_wad(units, decimals)
    print(f"[to_wad] units={units} decimals={decimals} -> wad={wad}")
    assert wad == units * 10 ** (18 - decimals)
    assert from_wad_down(wad, decimals) == units
    assert from_wad_up(wad, decimals) == units


def test_from_wad_directional_when_off_grid():
    print("[from_wad] 1 wei WAD onto an 8-decimal grid: down=0, up=1")
    assert from_wad_down(1, 8) == 0
    assert from_wad_up(1, 8) == 1
    assert from_wad_down(WAD, 8) == 10 ** 8


@pytest.mark.parametrize("bad", [-1, MAX_ASSET_DECIMALS + 1, 2.5, True])
def test_check_decimals_rejects(bad):
    print(f"[check_decimals] {bad!r} -> expect AmountDomainError")
    with pytest.raises(AmountDomainError):
        check_decimals(bad)


# -----------------------------
# TokenAmount
# -----------------------------

def test_token_amount_negative_rejected():
    print("[TokenAmount] value=-1 -> expect AmountDomainError")
    with pytest.raises(AmountDomainError):
        TokenAmount(-1, 18)


def test_token_amount_add_sub_and_underflow():
    a = TokenAmount(5, 8)
    b = TokenAmount(3, 8)
    print("[TokenAmount] 5 + 3, 5 - 3, 3 - 5 (underflow)")
    assert (a + b).value == 8
    assert (a - b).value == 2
    assert (b - b).is_zero()
    with pytest.raises(InvariantViolation):
        _ = b - a


def test_token_amount_precision_mismatch_raises():
    print("[TokenAmount] 8-decimal + 18-decimal operands -> AmountDomainError")
    with pytest.raises(AmountDomainError):
        _ = TokenAmount(1, 8) + TokenAmount(1, 18)


def test_token_amount_rescale_directional():
    a = TokenAmount(123456789012345678, 18)  # 0.123456789012345678
    down = a.rescale(8)
    up = a.rescale(8, round_up=True)
    print(f"[rescale] 18->8 decimals: down={down.value} up={up.value}")
    assert down.value == 12345678
    assert up.value == 12345679
    assert TokenAmount(12345678, 8).rescale(18).value == 123456780000000000


def test_token_amount_from_decimal_exact_or_raise():
    print("[from_decimal] '1.5' on 8 decimals exact; '0.123456789' on 8 decimals rejected")
    assert TokenAmount.from_decimal(Decimal("1.5"), 8).value == 150_000_000
    with pytest.raises(AmountDomainError):
        TokenAmount.from_decimal(Decimal("0.123456789"), 8)


# -----------------------------
# Decimal bridges (I/O only)
# -----------------------------

def test_decimal_bridges_round_in_up_out_down():
    x = Decimal("0.000000015")  # 1.5 base units of an 8-decimal token
    print(f"[decimal bridges] x={x}: in=ceil -> 2, out=floor -> 1")
    assert units_from_decimal_in(x, 8) == 2
    assert units_from_decimal_out(x, 8) == 1


def test_decimal_from_units_large_values_exact():
    big = 123_456_789_123_456_789_123_456_789_123  # > default Decimal precision
    d = decimal_from_units(big, 18)
    print(f"[decimal_from_units] big={big} -> {d}")
    assert d == Decimal("123456789123.456789123456789123")


@pytest.mark.parametrize("bad", [Decimal("-0.1"), Decimal("NaN"), Decimal("Infinity")])
def test_decimal_bridges_reject_invalid(bad):
    print(f"[decimal bridges] {bad} -> expect AmountDomainError")
    with pytest.raises(AmountDomainError):
        units_from_decimal_out(bad, 8)
