"""HTTP endpoints for the native stub mirroring a read-only chain RPC surface.

The adapter uses ORM access for determinism; these endpoints let a client inspect
what the ledger's deposits and withdrawals did on the (simulated) native side.
"""

from django.http import JsonResponse
from .models import NativeStubAccount, NativeStubTransfer


def balance(request, address: str):
	"""
	GET: Native TAO units held by an address (0 if never seen)
	"""
	acct = NativeStubAccount.objects.filter(address=address.strip().lower()).first()
	return JsonResponse({"address": address, "balance_units": str(acct.balance_units if acct else 0)})


def transfers(request):
	"""
	GET: Most recent native transfers, newest first
	"""
	qs = NativeStubTransfer.objects.order_by("-id")[:50]
	data = [
		{
			"sender": t.sender,
			"recipient": t.recipient,
			"amount_units": str(t.amount_units),
			"memo": t.memo,
			"occurred_at": t.occurred_at.isoformat().replace("+00:00", "Z"),
		}
		for t in qs
	]
	return JsonResponse(data, safe=False)
