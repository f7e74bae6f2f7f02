"""Demo helpers: deploy the token and hand out native TAO from the stub faucet."""

from django.http import JsonResponse, HttpResponseBadRequest
from django.views.decorators.csrf import csrf_exempt
from core.services import DemoServices
from .views_ops import BadRequest, _body


@csrf_exempt
def seed(request):
	"""
	POST: Create/fetch the token and fund the configured demo accounts with native TAO
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	token, funded = DemoServices.seed_demo()
	return JsonResponse({
		"token": token.symbol,
		"address": token.address,
		"funded": {account: str(units) for account, units in funded.items()},
	})


@csrf_exempt
def fund(request):
	"""
	POST: Credit `amount_tao` native TAO to `account` on the stub
	"""
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")
	try:
		body = _body(request)
		account = body.get("account")
		amount_tao = body.get("amount_tao")
		if not account or not amount_tao:
			raise BadRequest("account and amount_tao required")
		balance_units = DemoServices.fund(account, str(amount_tao))
	except BadRequest as e:
		return HttpResponseBadRequest(str(e))
	except ValueError as e:
		return HttpResponseBadRequest(str(e))
	except ArithmeticError:
		# decimal.InvalidOperation
		return HttpResponseBadRequest("amount_tao must be a non-negative TAO amount")
	return JsonResponse({"account": account, "native_balance_units": str(balance_units)}, status=201)
