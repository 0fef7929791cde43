import pytest

from citadel_funding.core.exc import (
    AmountDomainError,
    InsufficientAllowance,
    InsufficientBalance,
)
from citadel_funding.ledger import Token, TransferBatch


@pytest.fixture()
def tokens():
    a = Token("WETH", 18)
    b = Token("CTDL", 18)
    a.mint("alice", 100)
    b.mint("pool", 50)
    return a, b


# -----------------------------
# Token
# -----------------------------

def test_transfer_and_supply(tokens):
    a, _ = tokens
    a.transfer("alice", "bob", 40)
    print(f"[token] alice={a.balance_of('alice')} bob={a.balance_of('bob')} supply={a.total_supply}")
    assert a.balance_of("alice") == 60
    assert a.balance_of("bob") == 40
    assert a.total_supply == 100


def test_transfer_overdraw_raises(tokens):
    a, _ = tokens
    with pytest.raises(InsufficientBalance) as ei:
        a.transfer("alice", "bob", 101)
    print("[token] ->", ei.value)
    assert ei.value.needed == 101 and ei.value.available == 100
    assert a.balance_of("alice") == 100


def test_transfer_from_consumes_allowance(tokens):
    a, _ = tokens
    a.approve("alice", "spender", 30)
    a.transfer_from("spender", "alice", "bob", 20)
    assert a.allowance("alice", "spender") == 10
    with pytest.raises(InsufficientAllowance):
        a.transfer_from("spender", "alice", "bob", 11)
    assert a.balance_of("bob") == 20


def test_transfer_from_balance_failure_keeps_allowance(tokens):
    a, _ = tokens
    a.approve("alice", "spender", 500)
    with pytest.raises(InsufficientBalance):
        a.transfer_from("spender", "alice", "bob", 200)
    assert a.allowance("alice", "spender") == 500


@pytest.mark.parametrize("call", [
    lambda t: t.transfer("alice", "", 1),
    lambda t: t.mint("", 1),
    lambda t: t.transfer("alice", "bob", -1),
])
def test_token_domain_errors(tokens, call):
    with pytest.raises(AmountDomainError):
        call(tokens[0])


def test_token_rejects_bad_decimals():
    with pytest.raises(AmountDomainError):
        Token("BAD", 19)


# -----------------------------
# TransferBatch
# -----------------------------

def test_batch_commits_in_order(tokens):
    a, b = tokens
    a.approve("alice", "pool", 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "pool", 10, spender="pool")
    batch.stage(a, "pool", "treasury", 10)
    batch.stage(b, "pool", "alice", 5)
    batch.commit()
    print(f"[batch] alice WETH={a.balance_of('alice')} CTDL={b.balance_of('alice')} treasury={a.balance_of('treasury')}")
    assert a.balance_of("alice") == 90
    assert a.balance_of("pool") == 0
    assert a.balance_of("treasury") == 10
    assert b.balance_of("alice") == 5
    assert a.allowance("alice", "pool") == 0
    assert batch.staged == []


def test_batch_forward_relies_on_earlier_credit(tokens):
    print("[batch] pool holds 0 WETH; the forward is funded by the pull staged before it")
    a, _ = tokens
    a.approve("alice", "pool", 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "pool", 10, spender="pool")
    batch.stage(a, "pool", "treasury", 10)
    batch.validate()


@pytest.mark.parametrize("failing", ["allowance", "balance-late"])
def test_batch_is_all_or_nothing(tokens, failing):
    a, b = tokens
    a.approve("alice", "pool", 5 if failing == "allowance" else 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "pool", 10, spender="pool")
    batch.stage(a, "pool", "treasury", 10)
    batch.stage(b, "pool", "alice", 60 if failing == "balance-late" else 5)
    before = (a.balance_of("alice"), a.balance_of("pool"), b.balance_of("pool"), a.allowance("alice", "pool"))
    with pytest.raises((InsufficientAllowance, InsufficientBalance)):
        batch.commit()
    after = (a.balance_of("alice"), a.balance_of("pool"), b.balance_of("pool"), a.allowance("alice", "pool"))
    print(f"[batch:{failing}] before={before} after={after}")
    assert before == after


def test_batch_shadow_allowance_is_cumulative(tokens):
    a, _ = tokens
    a.approve("alice", "pool", 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "x", 6, spender="pool")
    batch.stage(a, "alice", "y", 6, spender="pool")
    with pytest.raises(InsufficientAllowance):
        batch.validate()


def test_batch_discard(tokens):
    a, _ = tokens
    batch = TransferBatch()
    batch.stage(a, "alice", "bob", 1)
    batch.discard()
    batch.commit()
    assert a.balance_of("bob") == 0


def test_batch_reports_net_change_without_moving_funds(tokens):
    a, b = tokens
    a.approve("alice", "pool", 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "pool", 10, spender="pool")
    batch.stage(a, "pool", "treasury", 10)
    batch.stage(b, "pool", "alice", 5)
    print("[batch] pool forwards what it pulls -> net 0 WETH; pays out 5 CTDL")
    assert batch.net_change(a, "pool") == 0
    assert batch.net_change(a, "alice") == -10
    assert batch.net_change(b, "pool") == -5
    assert batch.net_change(b, "nobody") == 0
    assert a.balance_of("alice") == 100 and a.balance_of("treasury") == 0


def test_batch_net_change_when_forwarding_to_self(tokens):
    a, _ = tokens
    a.approve("alice", "pool", 10)
    batch = TransferBatch()
    batch.stage(a, "alice", "pool", 10, spender="pool")
    batch.stage(a, "pool", "pool", 10)
    print("[batch] forward to self -> pool keeps the pulled 10")
    assert batch.net_change(a, "pool") == 10
