import pytest

from core import services
from core.constants import MAX_UINT256, ONE_TAO
from core.errors import ArithmeticOverflow, InsufficientBalance
from core.models import LedgerEventType, TokenBalance


def test_transfers_between_accounts(token, owner, other):
    services.deposit(token, owner, ONE_TAO)

    assert services.transfer(token, owner, other, ONE_TAO) is True

    event = services.events(token).last()
    assert event.event_type == LedgerEventType.TRANSFER
    assert event.args == (owner, other, ONE_TAO)
    assert services.balance_of(token, owner) == 0
    assert services.balance_of(token, other) == ONE_TAO


def test_fails_with_insufficient_balance(token, owner, other):
    with pytest.raises(InsufficientBalance):
        services.transfer(token, owner, other, ONE_TAO)

    assert services.balance_of(token, other) == 0
    assert services.events(token).count() == 0


def test_cannot_transfer_more_than_balance_to_self(token, other):
    with pytest.raises(InsufficientBalance):
        services.transfer(token, other, other, ONE_TAO)


def test_self_transfer_succeeds_and_emits(token, owner):
    services.deposit(token, owner, ONE_TAO)

    assert services.transfer(token, owner, owner, ONE_TAO) is True

    assert services.balance_of(token, owner) == ONE_TAO
    assert services.total_supply(token) == ONE_TAO
    assert services.events(token).last().args == (owner, owner, ONE_TAO)


def test_transfer_conserves_other_balances(token, owner, other, third):
    services.deposit(token, owner, 10)
    services.deposit(token, other, 20)
    services.deposit(token, third, 30)

    services.transfer(token, owner, other, 4)

    assert services.balance_of(token, owner) == 6
    assert services.balance_of(token, other) == 24
    assert services.balance_of(token, third) == 30
    assert services.total_supply(token) == 60


def test_zero_transfer_from_empty_account(token, owner, other):
    assert services.transfer(token, owner, other, 0) is True
    assert services.events(token).last().args == (owner, other, 0)


def test_destination_overflow_leaves_source_untouched(token, owner, other):
    services.deposit(token, owner, ONE_TAO)
    # A destination already at the ceiling; unreachable through the ledger, forced here.
    TokenBalance.objects.create(token=token, account=other, balance_units=MAX_UINT256)

    with pytest.raises(ArithmeticOverflow):
        services.transfer(token, owner, other, 1)

    assert services.balance_of(token, owner) == ONE_TAO
    assert services.balance_of(token, other) == MAX_UINT256
    assert services.events(token, LedgerEventType.TRANSFER).count() == 0


def test_overlong_account_identifiers_rejected(token, owner):
    too_long = "0x" + "f" * 70
    services.deposit(token, owner, ONE_TAO)

    with pytest.raises(ValueError):
        services.transfer(token, owner, too_long, 1)
    with pytest.raises(ValueError):
        services.deposit(token, too_long, 1)
    with pytest.raises(ValueError):
        services.approve(token, owner, too_long, 1)

    assert services.balance_of(token, owner) == ONE_TAO
    assert services.balance_of(token, too_long) == 0
    assert services.events(token).count() == 1
