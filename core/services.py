"""Ledger operations for the wrapped token.

Every mutating operation takes the WrappedToken aggregate first and the caller second,
runs inside @transaction.atomic and locks the token row before reading anything, so
calls on one token are applied one at a time. A failure anywhere raises, which rolls
back every write of the call, including its event.
"""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from .models import (
	WrappedToken, TokenBalance, Allowance, LedgerEvent, LedgerEventType, ReconciliationRun
)
from .constants import MAX_ACCOUNT_LENGTH, MAX_UINT256, UNLIMITED_ALLOWANCE, as_uint256, tao_to_units
from .errors import InsufficientBalance, InsufficientAllowance, ArithmeticOverflow, NativeTransferFailed
from .adapters.native_adapter import NativeAdapter

logger = logging.getLogger(__name__)


def normalize_account(account) -> str:
	"""
	Canonical form of an account identifier (addresses compare case-insensitively).
	"""
	return str(account or "").strip().lower()


def require_account(account) -> str:
	"""
	normalize_account for identifiers about to be written; rejects ones the tables cannot hold.
	"""
	account = normalize_account(account)
	if len(account) > MAX_ACCOUNT_LENGTH:
		raise ValueError(f"account identifier longer than {MAX_ACCOUNT_LENGTH} characters")
	return account


# --- Internals ---------------------------------------------------------------

def _lock_token(token: WrappedToken) -> WrappedToken:
	return WrappedToken.objects.select_for_update().get(pk=token.pk)


def _balance_row(token: WrappedToken, account: str) -> TokenBalance:
	row, _ = TokenBalance.objects.select_for_update().get_or_create(
		token=token, account=account, defaults={"balance_units": 0}
	)
	return row


def _allowance_row(token: WrappedToken, owner: str, spender: str) -> Allowance:
	row, _ = Allowance.objects.select_for_update().get_or_create(
		token=token, owner=owner, spender=spender, defaults={"amount_units": 0}
	)
	return row


def _checked_add(a: int, b: int) -> int:
	total = a + b
	if total > MAX_UINT256:
		raise ArithmeticOverflow()
	return total


def _spend_allowance(row: Allowance, amount: int) -> None:
	if row.amount_units == UNLIMITED_ALLOWANCE:
		# unlimited approval: left as is
		return
	row.amount_units -= amount
	row.save(update_fields=["amount_units"])


def _emit(token: WrappedToken, event_type: str, account: str, amount: int, counterparty: str = "") -> LedgerEvent:
	event = LedgerEvent.objects.create(
		token=token, event_type=event_type, account=account, counterparty=counterparty, amount_units=amount,
	)
	logger.info("%s %s %s", token.symbol, event_type, event.args)
	return event


def _move(token: WrappedToken, src: str, dst: str, amount: int) -> None:
	"""
	Debit src and credit dst as one step. Nothing is written until both sides are known to fit.
	"""
	src_row = _balance_row(token, src)
	if src_row.balance_units < amount:
		raise InsufficientBalance()
	if src == dst:
		return

	dst_row = _balance_row(token, dst)
	dst_units = _checked_add(dst_row.balance_units, amount)

	src_row.balance_units -= amount
	dst_row.balance_units = dst_units
	src_row.save(update_fields=["balance_units"])
	dst_row.save(update_fields=["balance_units"])


# --- Mutating operations -----------------------------------------------------

@transaction.atomic
def deposit(token: WrappedToken, caller: str, amount_received: int) -> None:
	"""
	Credit the caller with exactly the native value attached to the call. Any amount,
	zero included, is accepted; the only failure is overflow.
	"""
	caller = require_account(caller)
	amount_received = as_uint256(amount_received)
	token = _lock_token(token)

	supply = _checked_add(token.total_supply, amount_received)
	row = _balance_row(token, caller)
	row.balance_units = _checked_add(row.balance_units, amount_received)

	row.save(update_fields=["balance_units"])
	token.total_supply = supply
	token.save(update_fields=["total_supply"])

	_emit(token, LedgerEventType.DEPOSIT, caller, amount_received)


# A payment with no function selected is a deposit.
receive = deposit


@transaction.atomic
def withdraw(token: WrappedToken, caller: str, amount: int) -> None:
	"""
	Burn `amount` of the caller's WTAO and send the same amount of native TAO back.

	Balance and supply are written BEFORE the native send: the send may call back into
	this ledger, and a nested withdraw must see the debited balance. If the send
	reports failure we raise and the atomic block undoes the debit.
	"""
	caller = require_account(caller)
	amount = as_uint256(amount)
	token = _lock_token(token)

	row = _balance_row(token, caller)
	if row.balance_units < amount:
		raise InsufficientBalance()

	row.balance_units -= amount
	row.save(update_fields=["balance_units"])
	token.total_supply -= amount
	token.save(update_fields=["total_supply"])

	if not NativeAdapter.send(token.address, caller, amount, memo="withdraw"):
		raise NativeTransferFailed()

	_emit(token, LedgerEventType.WITHDRAWAL, caller, amount)


@transaction.atomic
def transfer(token: WrappedToken, caller: str, to: str, amount: int) -> bool:
	"""
	Move `amount` from the caller to `to`. A transfer to oneself still has to be covered
	by the balance and still emits.
	"""
	caller, to = require_account(caller), require_account(to)
	amount = as_uint256(amount)
	token = _lock_token(token)

	_move(token, caller, to, amount)

	_emit(token, LedgerEventType.TRANSFER, caller, amount, counterparty=to)
	return True


@transaction.atomic
def approve(token: WrappedToken, caller: str, spender: str, amount: int) -> bool:
	"""
	Set (replace, not add to) the spender's allowance over the caller's balance.

	There is no guard against the approve/transfer_from front-running race; changing a
	non-zero allowance to another non-zero value lets a watching spender use both.
	"""
	caller, spender = require_account(caller), require_account(spender)
	amount = as_uint256(amount)
	token = _lock_token(token)

	row = _allowance_row(token, caller, spender)
	row.amount_units = amount
	row.save(update_fields=["amount_units"])

	_emit(token, LedgerEventType.APPROVAL, caller, amount, counterparty=spender)
	return True


@transaction.atomic
def transfer_from(token: WrappedToken, caller: str, src: str, dst: str, amount: int) -> bool:
	"""
	Spend the caller's allowance over `src` to move `amount` to `dst`.

	The balance is checked before the allowance so each failure reports its own reason.
	Only a Transfer event is emitted; consuming the allowance emits no Approval.
	"""
	caller, src, dst = require_account(caller), require_account(src), require_account(dst)
	amount = as_uint256(amount)
	token = _lock_token(token)

	if _balance_row(token, src).balance_units < amount:
		raise InsufficientBalance()

	allowed = _allowance_row(token, src, caller)
	if allowed.amount_units < amount:
		raise InsufficientAllowance()

	_spend_allowance(allowed, amount)

	_move(token, src, dst, amount)

	_emit(token, LedgerEventType.TRANSFER, src, amount, counterparty=dst)
	return True


# --- Read-only queries -------------------------------------------------------

def balance_of(token: WrappedToken, account: str) -> int:
	row = TokenBalance.objects.filter(token_id=token.pk, account=normalize_account(account)).first()
	return row.balance_units if row else 0


def allowance(token: WrappedToken, owner: str, spender: str) -> int:
	row = Allowance.objects.filter(
		token_id=token.pk, owner=normalize_account(owner), spender=normalize_account(spender)
	).first()
	return row.amount_units if row else 0


def total_supply(token: WrappedToken) -> int:
	return WrappedToken.objects.values_list("total_supply", flat=True).get(pk=token.pk)


def name(token: WrappedToken) -> str:
	return token.name


def symbol(token: WrappedToken) -> str:
	return token.symbol


def decimals(token: WrappedToken) -> int:
	return token.decimals


def events(token: WrappedToken, event_type: str | None = None):
	"""
	Emitted events for a token, oldest first, optionally of one type.
	"""
	qs = LedgerEvent.objects.filter(token_id=token.pk)
	if event_type:
		qs = qs.filter(event_type=event_type)
	return qs.order_by("id")


# --- Host-side flows ---------------------------------------------------------

@transaction.atomic
def pay_and_deposit(token: WrappedToken, caller: str, value: int) -> None:
	"""
	Payment-bearing call: collect `value` native TAO from the caller into the ledger's
	reserve address, then deposit it. Both steps commit or neither does.
	"""
	caller = require_account(caller)
	value = as_uint256(value)
	# token row before any native account, the same order withdraw takes them in
	token = _lock_token(token)
	if not NativeAdapter.send(caller, token.address, value, memo="deposit"):
		raise NativeTransferFailed("Insufficient native funds")
	deposit(token, caller, value)


@transaction.atomic
def reconcile(token: WrappedToken) -> ReconciliationRun:
	"""
	Check supply == sum of balances == native reserve and store the snapshot.
	"""
	token = _lock_token(token)
	supply = token.total_supply
	balances_sum = sum(TokenBalance.objects.filter(token=token).values_list("balance_units", flat=True))
	reserve = NativeAdapter.balance(token.address)

	notes = []
	if balances_sum != supply:
		notes.append(f"balances_sum {balances_sum} != total_supply {supply}")
	if reserve != supply:
		notes.append(f"reserve {reserve} != total_supply {supply}")

	run = ReconciliationRun.objects.create(
		token=token,
		total_supply_units=supply,
		balances_sum_units=balances_sum,
		reserve_units=reserve,
		ok=not notes,
		notes="; ".join(notes),
	)
	if notes:
		logger.warning("%s reconciliation mismatch: %s", token.symbol, run.notes)
	return run


class DemoServices:

	@staticmethod
	@transaction.atomic
	def seed_token() -> WrappedToken:
		"""
		Create (or fetch) the configured wrapped token and make sure its reserve account exists
		"""
		token, created = WrappedToken.objects.get_or_create(
			symbol=settings.WTAO_SYMBOL,
			defaults={
				"name": settings.WTAO_NAME,
				"decimals": settings.WTAO_DECIMALS,
				"address": normalize_account(settings.WTAO_CONTRACT_ADDRESS),
			},
		)
		NativeAdapter.ensure_account(token.address)
		if created:
			logger.info("created token %s (%s) at %s", token.symbol, token.name, token.address)
		return token

	@staticmethod
	@transaction.atomic
	def seed_demo():
		"""
		Seed the token and fund every demo account with faucet TAO on the native stub
		"""
		token = DemoServices.seed_token()
		funded = {}
		for account in settings.DEMO_ACCOUNTS:
			account = normalize_account(account)
			funded[account] = NativeAdapter.fund(account, tao_to_units(settings.DEMO_FAUCET_TAO))
		return token, funded

	@staticmethod
	def fund(account: str, amount_tao: str | Decimal) -> int:
		"""
		Faucet: credit native TAO to an account (not WTAO; deposit it to wrap)
		"""
		return NativeAdapter.fund(require_account(account), as_uint256(tao_to_units(amount_tao)))
