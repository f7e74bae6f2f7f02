"""Database models for the wrapped-token ledger.


Tables:
- WrappedToken: the ledger aggregate (metadata, reserve address, total supply)
- TokenBalance: per-account token units; a missing row reads as zero
- Allowance: (owner, spender) spending limits consumed by transfer_from
- LedgerEventType
- LedgerEvent: append-only, ordered log of Deposit/Withdrawal/Transfer/Approval
- ReconciliationRun: snapshot of supply vs balances vs native reserve
"""

import uuid
from django.db import models

from .constants import MAX_ACCOUNT_LENGTH
from .fields import Uint256Field


class WrappedToken(models.Model):
	"""
	The ledger itself. Balances, allowances and events hang off this row and every
	operation locks it first, so one token's operations apply one at a time.

	name/symbol/decimals are written once at creation.
	"""
	id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
	name = models.CharField(max_length=100)
	symbol = models.CharField(max_length=20, unique=True)
	decimals = models.PositiveSmallIntegerField(default=18)
	address = models.CharField(max_length=MAX_ACCOUNT_LENGTH, unique=True) # native account holding the reserve
	total_supply = Uint256Field()
	created_at = models.DateTimeField(auto_now_add=True)

	def __str__(self):
		return self.symbol


class TokenBalance(models.Model):
	"""
	Token units held by one account
	"""
	id = models.BigAutoField(primary_key=True)
	token = models.ForeignKey(WrappedToken, on_delete=models.CASCADE, related_name="balances")
	account = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	balance_units = Uint256Field()

	class Meta:
		unique_together = (("token", "account"),)


class Allowance(models.Model):
	"""
	How much `spender` may move out of `owner`'s balance. Replaced by approve, never summed.
	"""
	id = models.BigAutoField(primary_key=True)
	token = models.ForeignKey(WrappedToken, on_delete=models.CASCADE, related_name="allowances")
	owner = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	spender = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	amount_units = Uint256Field()

	class Meta:
		unique_together = (("token", "owner", "spender"),)


class LedgerEventType(models.TextChoices):
	DEPOSIT = "Deposit", "Deposit"
	WITHDRAWAL = "Withdrawal", "Withdrawal"
	TRANSFER = "Transfer", "Transfer"
	APPROVAL = "Approval", "Approval"


class LedgerEvent(models.Model):
	"""
	One row per successful state-mutating call, in emission order (id).

	Argument tuples:
	- Deposit(account, amount), Withdrawal(account, amount)
	- Transfer(account=from, counterparty=to, amount)
	- Approval(account=owner, counterparty=spender, amount)
	"""
	id = models.BigAutoField(primary_key=True)
	token = models.ForeignKey(WrappedToken, on_delete=models.CASCADE, related_name="events")
	event_type = models.CharField(max_length=16, choices=LedgerEventType.choices)
	account = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	counterparty = models.CharField(max_length=MAX_ACCOUNT_LENGTH, blank=True, default="")
	amount_units = Uint256Field()
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		ordering = ["id"]

	@property
	def args(self) -> tuple:
		if self.event_type in (LedgerEventType.DEPOSIT, LedgerEventType.WITHDRAWAL):
			return (self.account, self.amount_units)
		return (self.account, self.counterparty, self.amount_units)


class ReconciliationRun(models.Model):
	"""
	Snapshot of total supply vs sum of balances vs native reserve held by the ledger.
	"""
	id = models.BigAutoField(primary_key=True)
	token = models.ForeignKey(WrappedToken, on_delete=models.CASCADE, related_name="reconciliations")
	total_supply_units = Uint256Field()
	balances_sum_units = Uint256Field()
	reserve_units = Uint256Field()
	ok = models.BooleanField(default=True)
	notes = models.TextField(blank=True, default="")
	created_at = models.DateTimeField(auto_now_add=True)
