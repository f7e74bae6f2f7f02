"""Unit conversion helpers and integer bounds shared across the ledger.


- TOKEN_DECIMALS controls the token granularity (WTAO mirrors TAO: 18).
- tao_to_units / units_to_tao convert between human TAO and integer token units.
- MAX_UINT256 bounds every balance, allowance and the total supply.
"""

from django.conf import settings
from decimal import Decimal, ROUND_DOWN, localcontext

TOKEN_DECIMALS = getattr(settings, "WTAO_DECIMALS", 18)
TEN_POW = 10 ** TOKEN_DECIMALS

MAX_UINT256 = 2 ** 256 - 1
UINT256_DIGITS = len(str(MAX_UINT256))

# Width of every account column (balances, allowances, events, native stub).
MAX_ACCOUNT_LENGTH = 64

# An allowance at this value is never decremented by transfer_from.
UNLIMITED_ALLOWANCE = MAX_UINT256

ONE_TAO = TEN_POW


def tao_to_units(amount_tao: str | Decimal) -> int:
	"""
	Convert human-readable TAO string (e.g., "1.5") to integer token units using TOKEN_DECIMALS
	"""
	with localcontext() as ctx:
		ctx.prec = UINT256_DIGITS + TOKEN_DECIMALS
		amount_tao = Decimal(amount_tao)  # accept str or Decimal
		return int((amount_tao * Decimal(TEN_POW)).quantize(Decimal("1"), rounding=ROUND_DOWN))


def units_to_tao(amount_units: int) -> Decimal:
	"""
	Convert integer token units back to a TAO amount (full precision, trailing zeros kept).
	"""
	with localcontext() as ctx:
		ctx.prec = UINT256_DIGITS + TOKEN_DECIMALS
		return Decimal(amount_units).scaleb(-TOKEN_DECIMALS)


def as_uint256(value) -> int:
	"""
	Coerce an amount to int and check it is representable as uint256.

	Raises ValueError for anything else (floats, negative, fractional, non-numeric, too large).
	"""
	if isinstance(value, (bool, float, Decimal)):
		raise ValueError("amount must be an integer or a decimal string")
	if isinstance(value, str):
		value = value.strip()
		if not value.isdigit():
			raise ValueError("amount must be a non-negative integer")
	try:
		as_int = int(value)
	except (TypeError, ValueError):
		raise ValueError("amount must be an integer")
	if as_int < 0 or as_int > MAX_UINT256:
		raise ValueError("amount out of uint256 range")
	return as_int
