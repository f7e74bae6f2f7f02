"""Ledger error taxonomy.

Each kind is a ValidationError so views can turn it into a clean 400 the same way
for every operation. Raising one inside an atomic block reverts the whole call.
"""

from django.core.exceptions import ValidationError


class LedgerError(ValidationError):
	default_message = "Ledger error"
	default_code = "ledger_error"

	def __init__(self, message: str | None = None):
		super().__init__(message or self.default_message, code=self.default_code)


class InsufficientBalance(LedgerError):
	default_message = "Insufficient balance"
	default_code = "insufficient_balance"


class InsufficientAllowance(LedgerError):
	default_message = "Insufficient allowance"
	default_code = "insufficient_allowance"


class ArithmeticOverflow(LedgerError):
	default_message = "Arithmetic overflow"
	default_code = "arithmetic_overflow"


class NativeTransferFailed(LedgerError):
	default_message = "Native transfer failed"
	default_code = "native_transfer_failed"
