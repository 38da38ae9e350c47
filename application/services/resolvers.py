import json
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from decimal import Decimal

from application.services.validation import FinitePositive, ValidationPolicy, WithinBand, to_decimal
from domain.exceptions.gold import GoldPriceException, ParseError
from domain.models.gold import FailureReason, Fallback, NotFound, PriceQuote, Resolved, ResolutionOutcome
from infrastructure.http import FetchClient
from infrastructure.providers.base import ProviderSpec

logger = logging.getLogger(__name__)


class ProviderChainResolver:
	"""
	Walks an ordered provider list and stops at the first candidate that
	passes validation. Provider failures are recorded, never raised; when
	every provider fails the configured safe default is returned instead.
	"""

	def __init__(
		self,
		fetch_client: FetchClient,
		providers: Sequence[ProviderSpec],
		policy: ValidationPolicy,
		fallback_value: Decimal,
	):
		self.fetch_client = fetch_client
		self.providers = tuple(providers)
		self.policy = policy
		self.fallback_value = fallback_value

	async def _walk(self, base: str, target: str, unit: str) -> ResolutionOutcome:
		trail: list[FailureReason] = []

		async with aclosing(self._attempts(base, target, unit)) as attempts:
			async for result in attempts:
				if isinstance(result, PriceQuote):
					logger.info(
						f'Resolved {unit} = {result.value} from {result.provider_name}',
						extra={'extra_data': {'unit': unit, 'provider': result.provider_name, 'skipped': len(trail)}},
					)
					return Resolved(quote=result, trail=tuple(trail))
				trail.append(result)

		logger.error(
			f'All providers failed for {unit}, using fallback {self.fallback_value}: '
			+ ' | '.join(str(failure) for failure in trail),
			extra={'extra_data': {'unit': unit, 'trail': [str(failure) for failure in trail]}},
		)
		return Fallback(value=self.fallback_value, unit=unit, trail=tuple(trail))

	async def _attempts(self, base: str, target: str, unit: str) -> AsyncIterator[PriceQuote | FailureReason]:
		# The next provider is only fetched if the consumer keeps iterating.
		for spec in self.providers:
			yield await self._attempt(spec, base, target, unit)

	async def _attempt(self, spec: ProviderSpec, base: str, target: str, unit: str) -> PriceQuote | FailureReason:
		url, params = spec.render(base=base, target=target)
		try:
			body = await self.fetch_client.fetch(url, params=params or None, headers=dict(spec.headers) or None)
			value = to_decimal(self._extract(spec, self._parse(body), target))
			self.policy.check(value)
		except GoldPriceException as e:
			logger.warning(f'Provider {spec.name} rejected for {unit}: {e.__class__.__name__}: {e}')
			return FailureReason(provider_name=spec.name, reason=f'{e.__class__.__name__}: {e}')

		return PriceQuote(value=value, unit=unit, provider_name=spec.name)

	@staticmethod
	def _parse(body: str):
		try:
			return json.loads(body)
		except (ValueError, RecursionError) as e:  # RecursionError: nested too deep for the decoder
			raise ParseError(f'invalid JSON: {e}') from e

	@staticmethod
	def _extract(spec: ProviderSpec, payload, target: str):
		try:
			extraction = spec.extractor(payload, target)
		except Exception as e:
			raise ParseError(f'extractor crashed: {e}') from e

		if isinstance(extraction, NotFound):
			raise ParseError(extraction.reason)
		return extraction.value


class CommodityPriceResolver(ProviderChainResolver):
	"""Gold spot price in USD per troy ounce; only a finite/positive check applies."""

	UNIT = 'USD/oz'

	def __init__(
		self,
		fetch_client: FetchClient,
		providers: Sequence[ProviderSpec],
		fallback_price: Decimal,
		policy: ValidationPolicy | None = None,
	):
		super().__init__(fetch_client, providers, policy or FinitePositive(), fallback_price)

	async def resolve(self) -> ResolutionOutcome:
		return await self._walk(base='USD', target='', unit=self.UNIT)


class ExchangeRateResolver(ProviderChainResolver):
	"""Conversion rate base -> target; candidates must fall inside the plausibility band."""

	def __init__(
		self,
		fetch_client: FetchClient,
		providers: Sequence[ProviderSpec],
		fallback_rate: Decimal,
		min_rate: Decimal,
		max_rate: Decimal,
	):
		super().__init__(fetch_client, providers, WithinBand(min_rate, max_rate), fallback_rate)

	async def resolve(self, base_currency: str, target_currency: str) -> ResolutionOutcome:
		return await self._walk(
			base=base_currency,
			target=target_currency,
			unit=f'{base_currency}/{target_currency}',
		)
