import pytest

from core import services
from core.adapters.native_adapter import NativeAdapter
from core.constants import ONE_TAO
from core.errors import InsufficientBalance, NativeTransferFailed
from core.models import LedgerEventType


def test_allows_withdrawals_and_burns(wrap, funded, owner):
    wrap(owner, ONE_TAO)
    native_before = NativeAdapter.balance(owner)

    services.withdraw(funded, owner, ONE_TAO)

    event = services.events(funded).last()
    assert event.event_type == LedgerEventType.WITHDRAWAL
    assert event.args == (owner, ONE_TAO)
    assert services.balance_of(funded, owner) == 0
    assert services.total_supply(funded) == 0
    assert NativeAdapter.balance(owner) == native_before + ONE_TAO
    assert NativeAdapter.balance(funded.address) == 0


def test_reverts_with_insufficient_balance(token, owner):
    with pytest.raises(InsufficientBalance) as e:
        services.withdraw(token, owner, ONE_TAO)

    assert e.value.message == "Insufficient balance"
    assert services.total_supply(token) == 0
    assert services.events(token).count() == 0


def test_non_existent_balance_cannot_be_withdrawn(token, other):
    with pytest.raises(InsufficientBalance):
        services.withdraw(token, other, 1)


def test_partial_withdrawal(wrap, funded, owner):
    wrap(owner, 3 * ONE_TAO)

    services.withdraw(funded, owner, ONE_TAO)

    assert services.balance_of(funded, owner) == 2 * ONE_TAO
    assert services.total_supply(funded) == 2 * ONE_TAO
    assert NativeAdapter.balance(funded.address) == 2 * ONE_TAO


def test_deposit_then_withdraw_restores_state(wrap, funded, owner, other):
    wrap(other, 7)
    balance_before = services.balance_of(funded, owner)
    supply_before = services.total_supply(funded)

    wrap(owner, ONE_TAO)
    services.withdraw(funded, owner, ONE_TAO)

    assert services.balance_of(funded, owner) == balance_before
    assert services.total_supply(funded) == supply_before


def test_allowance_does_not_limit_own_withdraw(wrap, funded, owner, other):
    wrap(owner, ONE_TAO)
    services.approve(funded, owner, other, 0)

    services.withdraw(funded, owner, ONE_TAO)

    assert services.balance_of(funded, owner) == 0


def test_failed_native_transfer_rolls_back(wrap, funded, owner, monkeypatch):
    wrap(owner, ONE_TAO)
    events_before = services.events(funded).count()
    monkeypatch.setattr(NativeAdapter, "send", staticmethod(lambda *args, **kwargs: False))

    with pytest.raises(NativeTransferFailed):
        services.withdraw(funded, owner, ONE_TAO)

    assert services.balance_of(funded, owner) == ONE_TAO
    assert services.total_supply(funded) == ONE_TAO
    assert services.events(funded).count() == events_before
    assert not services.events(funded, LedgerEventType.WITHDRAWAL).exists()


def test_reentrant_withdraw_sees_debited_balance(wrap, funded, owner, monkeypatch):
    wrap(owner, ONE_TAO)
    real_send = NativeAdapter.send
    seen = {}

    def reentrant_send(sender, recipient, amount_units, memo=""):
        seen["balance"] = services.balance_of(funded, recipient)
        seen["supply"] = services.total_supply(funded)
        with pytest.raises(InsufficientBalance):
            services.withdraw(funded, recipient, amount_units)
        return real_send(sender, recipient, amount_units, memo)

    monkeypatch.setattr(NativeAdapter, "send", staticmethod(reentrant_send))

    services.withdraw(funded, owner, ONE_TAO)

    assert seen == {"balance": 0, "supply": 0}
    assert services.balance_of(funded, owner) == 0
    assert services.events(funded, LedgerEventType.WITHDRAWAL).count() == 1
    assert NativeAdapter.balance(funded.address) == 0
