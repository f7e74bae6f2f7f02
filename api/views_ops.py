"""Operational endpoints that mutate the ledger (deposit/withdraw/transfer/approve)."""

import json
import logging
from django.http import JsonResponse, HttpResponseBadRequest
from django.core.exceptions import ValidationError
from django.conf import settings
from django.middleware.csrf import get_token
from django.views.decorators.csrf import csrf_exempt
from core import services
from core.models import WrappedToken

logger = logging.getLogger(__name__)


def health(request):
	return JsonResponse({"ok": True})


def csrf(request):
	# Forces creation/rotation of the CSRF token AND sets 'csrftoken' cookie
	return JsonResponse({"csrftoken": get_token(request)})


# --- Helpers -----------------------------------------------------------------

class BadRequest(Exception):
	pass


def _token() -> WrappedToken:
	return WrappedToken.objects.get(symbol=settings.WTAO_SYMBOL)


def _caller(request) -> str:
	"""
	The host vouches for the caller; we take the X-Caller header as given.
	"""
	caller = services.normalize_account(request.headers.get("X-Caller"))
	if not caller:
		raise BadRequest("X-Caller header required")
	return caller


def _body(request) -> dict:
	try:
		body = json.loads(request.body or b"{}")
	except ValueError:
		raise BadRequest("Invalid JSON")
	if not isinstance(body, dict):
		raise BadRequest("JSON object required")
	return body


def _required(body: dict, field: str) -> str:
	value = body.get(field)
	if value in (None, ""):
		raise BadRequest(f"{field} required")
	return value


def _run(request, operation):
	"""
	Shared POST handling: parse, call the ledger, map ledger errors to 400 JSON.
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	try:
		return operation(_caller(request), _body(request))
	except BadRequest as e:
		return HttpResponseBadRequest(str(e))
	except WrappedToken.DoesNotExist:
		return HttpResponseBadRequest("Token not deployed")
	except ValidationError as e:
		logger.info("%s rejected: %s", request.path, e.code)
		return JsonResponse({"error": e.message, "code": e.code}, status=400)
	except ValueError as e:
		return HttpResponseBadRequest(str(e))


# --- Ledger operations -------------------------------------------------------

@csrf_exempt
def receive(request):
	"""
	POST: Direct payment with no function selected; same as deposit
	"""
	return deposit(request)


@csrf_exempt
def deposit(request):
	"""
	POST: Pay `value` native TAO in and get the same amount of WTAO
	"""
	def op(caller, body):
		value = _required(body, "value")
		services.pay_and_deposit(_token(), caller, value)
		return JsonResponse({"ok": True}, status=201)

	return _run(request, op)


@csrf_exempt
def withdraw(request):
	"""
	POST: Burn `amount` WTAO and receive the same amount of native TAO
	"""
	def op(caller, body):
		amount = _required(body, "amount")
		services.withdraw(_token(), caller, amount)
		return JsonResponse({"ok": True})

	return _run(request, op)


@csrf_exempt
def transfer(request):
	"""
	POST: Move `amount` WTAO from the caller to `to`
	"""
	def op(caller, body):
		to = _required(body, "to")
		amount = _required(body, "amount")
		return JsonResponse({"ok": services.transfer(_token(), caller, to, amount)})

	return _run(request, op)


@csrf_exempt
def approve(request):
	"""
	POST: Set the allowance of `spender` over the caller's WTAO to `amount`
	"""
	def op(caller, body):
		spender = _required(body, "spender")
		amount = _required(body, "amount")
		return JsonResponse({"ok": services.approve(_token(), caller, spender, amount)})

	return _run(request, op)


@csrf_exempt
def transfer_from(request):
	"""
	POST: Move `amount` WTAO from `from` to `to` using the caller's allowance
	"""
	def op(caller, body):
		src = _required(body, "from")
		dst = _required(body, "to")
		amount = _required(body, "amount")
		return JsonResponse({"ok": services.transfer_from(_token(), caller, src, dst, amount)})

	return _run(request, op)


@csrf_exempt
def reconcile(request):
	"""
	POST: Check total supply against balances and the native reserve; store the run
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	try:
		run = services.reconcile(_token())
	except WrappedToken.DoesNotExist:
		return HttpResponseBadRequest("Token not deployed")
	return JsonResponse({
		"ok": run.ok,
		"total_supply_units": str(run.total_supply_units),
		"balances_sum_units": str(run.balances_sum_units),
		"reserve_units": str(run.reserve_units),
		"notes": run.notes,
	})
