"""Adapter over the local native-chain stub.

In production, this would submit a signed value transfer to the chain and wait for
the receipt. Here we mutate the stub's ORM tables directly for repeatable,
deterministic tests.
"""

import logging

from django.db import transaction

from native_stub.models import NativeStubAccount, NativeStubTransfer

logger = logging.getLogger(__name__)


class NativeAdapter:
	"""
	Value transfers of native TAO. send() reports failure with False instead of raising,
	like a low-level chain call; callers decide what a failure means.
	"""

	@staticmethod
	def ensure_account(address: str):
		acct, _ = NativeStubAccount.objects.get_or_create(address=address, defaults={"balance_units": 0})
		return acct

	@staticmethod
	def balance(address: str) -> int:
		acct = NativeStubAccount.objects.filter(address=address).first()
		return acct.balance_units if acct else 0

	@staticmethod
	@transaction.atomic
	def fund(address: str, amount_units: int, memo: str = "faucet") -> int:
		"""
		Mint native TAO out of thin air for an address (demo faucet). Returns the new balance.
		"""
		acct = NativeStubAccount.objects.select_for_update().get(pk=NativeAdapter.ensure_account(address).pk)
		acct.balance_units += int(amount_units)
		acct.save(update_fields=["balance_units"])
		NativeStubTransfer.objects.create(sender="", recipient=address, amount_units=amount_units, memo=memo)
		return acct.balance_units

	@staticmethod
	@transaction.atomic
	def send(sender: str, recipient: str, amount_units: int, memo: str = "") -> bool:
		"""
		Move amount_units from sender to recipient. Returns False (and changes nothing)
		when the sender cannot cover it.
		"""
		src = NativeStubAccount.objects.select_for_update().get(pk=NativeAdapter.ensure_account(sender).pk)
		if src.balance_units < amount_units:
			logger.info("native send refused sender=%s amount=%s balance=%s", sender, amount_units, src.balance_units)
			return False
		src.balance_units -= amount_units
		src.save(update_fields=["balance_units"])

		dst = NativeStubAccount.objects.select_for_update().get(pk=NativeAdapter.ensure_account(recipient).pk)
		dst.balance_units += amount_units
		dst.save(update_fields=["balance_units"])

		NativeStubTransfer.objects.create(sender=sender, recipient=recipient, amount_units=amount_units, memo=memo)
		return True
