"""Model field for uint256 amounts.

uint256 does not fit BIGINT, and SQLite silently degrades big NUMERIC values to
REAL. We store the zero-padded decimal string instead (fixed width, so string
order matches numeric order) and hand ints back to Python.
"""

from django.core.exceptions import ValidationError
from django.db import models

from .constants import MAX_UINT256, UINT256_DIGITS


class Uint256Field(models.CharField):
	description = "Unsigned 256-bit integer"

	def __init__(self, *args, **kwargs):
		kwargs["max_length"] = UINT256_DIGITS
		kwargs.setdefault("default", 0)
		super().__init__(*args, **kwargs)

	def deconstruct(self):
		name, path, args, kwargs = super().deconstruct()
		del kwargs["max_length"]
		return name, path, args, kwargs

	def from_db_value(self, value, expression, connection):
		if value is None:
			return value
		return int(value)

	def to_python(self, value):
		if value is None or (isinstance(value, int) and not isinstance(value, bool)):
			return value
		try:
			return int(str(value).strip())
		except (TypeError, ValueError):
			raise ValidationError("'%(value)s' is not a uint256", code="invalid", params={"value": value})

	def get_prep_value(self, value):
		value = self.to_python(value)
		if value is None:
			return None
		if value < 0 or value > MAX_UINT256:
			raise ValueError(f"{value} out of uint256 range")
		return f"{value:0{UINT256_DIGITS}d}"

	def value_to_string(self, obj):
		return str(self.value_from_object(obj))
