"""In-process native-chain tables to simulate TAO balances and value transfers.

Stores one row per address and an append-only transfer log. Used by the native
adapter so deposits and withdrawals move real (simulated) TAO without network calls.
"""

import uuid
from django.db import models
from django.utils.timezone import now

from core.constants import MAX_ACCOUNT_LENGTH
from core.fields import Uint256Field


class NativeStubAccount(models.Model):
	"""
	Native TAO held by an address (accounts and the ledger's reserve alike)
	"""
	id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
	address = models.CharField(max_length=MAX_ACCOUNT_LENGTH, unique=True)
	balance_units = Uint256Field()


class NativeStubTransfer(models.Model):
	"""
	Append-only list of value transfers between addresses, in order
	"""
	id = models.BigAutoField(primary_key=True)
	sender = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	recipient = models.CharField(max_length=MAX_ACCOUNT_LENGTH)
	amount_units = Uint256Field()
	memo = models.CharField(max_length=100, blank=True, default="")
	occurred_at = models.DateTimeField(default=now)
