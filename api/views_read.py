"""Read-only endpoints to inspect the ledger (metadata, balances, allowances, events)."""

from django.http import JsonResponse, HttpResponseBadRequest
from django.conf import settings
from core import services
from core.adapters.native_adapter import NativeAdapter
from core.constants import units_to_tao
from core.models import WrappedToken, ReconciliationRun


def _token_or_none():
	return WrappedToken.objects.filter(symbol=settings.WTAO_SYMBOL).first()


def token(request):
	"""
	GET: Token metadata and current total supply
	"""
	t = _token_or_none()
	if t is None:
		return HttpResponseBadRequest("Token not deployed")
	return JsonResponse({
		"name": services.name(t),
		"symbol": services.symbol(t),
		"decimals": services.decimals(t),
		"totalSupply": str(services.total_supply(t)),
		"address": t.address,
	})


def balance(request, account: str):
	"""
	GET: WTAO balance of an account in integer units (0 when never seen)
	"""
	t = _token_or_none()
	units = services.balance_of(t, account) if t else 0
	return JsonResponse({
		"account": services.normalize_account(account),
		"balance_units": str(units),
		"balance_tao": str(units_to_tao(units)),
	})


def allowance(request, owner: str, spender: str):
	"""
	GET: Remaining allowance of spender over owner's balance
	"""
	t = _token_or_none()
	units = services.allowance(t, owner, spender) if t else 0
	return JsonResponse({
		"owner": services.normalize_account(owner),
		"spender": services.normalize_account(spender),
		"amount_units": str(units),
	})


def events(request):
	"""
	GET: Most recent ledger events, newest first (optionally ?type=Transfer)
	"""
	t = _token_or_none()
	if t is None:
		return JsonResponse([], safe=False)
	rows = services.events(t, request.GET.get("type")).order_by("-id")[:50]
	data = [
		{
			"id": r.id,
			"event": r.event_type,
			"args": [str(a) for a in r.args],
			"created_at": r.created_at.isoformat(),
		}
		for r in rows
	]
	return JsonResponse(data, safe=False)


def debug_summary(request):
	t = _token_or_none()
	if t is None:
		return HttpResponseBadRequest("Token not deployed")

	supply = services.total_supply(t)
	balances_sum = sum(t.balances.values_list("balance_units", flat=True))
	reserve = NativeAdapter.balance(t.address)
	last_run = ReconciliationRun.objects.filter(token=t).order_by("-id").first()

	return JsonResponse({
		"total_supply_units": str(supply),
		"balances_sum_units": str(balances_sum),
		"reserve_units": str(reserve),
		"match": (supply == balances_sum == reserve),
		"holders": t.balances.exclude(balance_units=0).count(),
		"events": t.events.count(),
		"last_reconciliation": {
			"ok": last_run.ok,
			"notes": last_run.notes,
			"created_at": last_run.created_at.isoformat(),
		} if last_run else None,
		"notes": "total_supply_units should equal balances_sum_units and reserve_units when everything is consistent.",
	})
