"""Public API surface for the WTAO ledger.

- POST / : bare payment, treated as a deposit
- /health, /csrf: liveness and CSRF cookie for browser clients
- deposit / withdraw / transfer / approve / transfer-from: ledger operations (X-Caller header)
- /token, /balance, /allowance, /events: read-only views
- /reconcile, /debug/summary: supply vs balances vs reserve checks
- /demo/*: convenience helpers to deploy the token and fund accounts
"""

from django.urls import path
from .views_demo import seed, fund
from .views_ops import health, csrf, receive, deposit, withdraw, transfer, approve, transfer_from, reconcile
from .views_read import token, balance, allowance, events, debug_summary


urlpatterns = [
	path("", receive),
	path("health", health),
	path("csrf", csrf),
	path("deposit", deposit),
	path("withdraw", withdraw),
	path("transfer", transfer),
	path("approve", approve),
	path("transfer-from", transfer_from),
	path("reconcile", reconcile),
	path("token", token),
	path("balance/<str:account>", balance),
	path("allowance/<str:owner>/<str:spender>", allowance),
	path("events", events),
	path("debug/summary", debug_summary),
	path("demo/seed", seed),
	path("demo/fund", fund),
]
