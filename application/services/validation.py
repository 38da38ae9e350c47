from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

from domain.exceptions.gold import ParseError, ValidationError


class ValidationPolicy(Protocol):
	def check(self, value: Decimal) -> None: ...


def to_decimal(raw: Any) -> Decimal:
	"""Coerce an extracted JSON scalar (number or numeric string) to Decimal."""
	if isinstance(raw, bool) or not isinstance(raw, int | float | str | Decimal):
		raise ParseError(f'expected a number, got {type(raw).__name__}')
	if isinstance(raw, str) and '_' in raw:
		raise ParseError(f'not a number: {raw!r}')
	try:
		return Decimal(str(raw).strip())
	except InvalidOperation as e:
		raise ParseError(f'not a number: {raw!r}') from e


class FinitePositive:
	"""Accepts any finite value above zero; used where no realistic bound is known."""

	def check(self, value: Decimal) -> None:
		if not value.is_finite():
			raise ValidationError(f'non-finite value {value}')
		if value <= 0:
			raise ValidationError(f'non-positive value {value}')

	def __repr__(self) -> str:
		return 'FinitePositive()'


class WithinBand(FinitePositive):
	"""Accepts finite values strictly inside (minimum, maximum)."""

	def __init__(self, minimum: Decimal, maximum: Decimal):
		if minimum >= maximum:
			raise ValueError('minimum must be lower than maximum')
		self.minimum = minimum
		self.maximum = maximum

	def check(self, value: Decimal) -> None:
		super().check(value)
		if not self.minimum < value < self.maximum:
			raise ValidationError(f'out of range {value} (expected {self.minimum}..{self.maximum})')

	def __repr__(self) -> str:
		return f'WithinBand({self.minimum}, {self.maximum})'
