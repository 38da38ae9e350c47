import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from application.services.resolvers import CommodityPriceResolver, ExchangeRateResolver
from domain.exceptions.gold import AggregationError
from domain.models.gold import AggregateResult, Fallback, PriceTable, ResolutionOutcome

logger = logging.getLogger(__name__)

OUNCE_TO_GRAM = Decimal('31.1034768')
PRICE_PRECISION = Decimal('0.001')
KARATS = (24, 22, 21, 18)
PROVENANCE_SEPARATOR = ' × '


def _purity(base: Decimal, karat: int) -> Decimal:
	return (base * karat / 24).quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)


def build_price_table(per_gram: Decimal) -> PriceTable:
	"""Karat table from the unrounded 24k per-gram price."""
	k24, k22, k21, k18 = (_purity(per_gram, karat) for karat in KARATS)
	return PriceTable(k24=k24, k22=k22, k21=k21, k18=k18)


def compute_table(
	commodity: ResolutionOutcome,
	rate: ResolutionOutcome,
	*,
	timestamp: datetime,
	ounce_to_gram: Decimal = OUNCE_TO_GRAM,
) -> AggregateResult:
	try:
		with localcontext() as ctx:
			# keep 0.001 resolution whatever the magnitude of the inputs
			ctx.prec += max(0, commodity.value.adjusted() + rate.value.adjusted() + 2)
			per_gram_usd = commodity.value / ounce_to_gram
			prices = build_price_table(per_gram_usd * rate.value)
	except ArithmeticError as e:
		raise AggregationError(f'price arithmetic failed: {e}') from e

	return AggregateResult(
		prices=prices,
		provenance=f'{commodity.source}{PROVENANCE_SEPARATOR}{rate.source}',
		timestamp=timestamp,
		commodity=commodity,
		rate=rate,
	)


class PriceAggregator:
	def __init__(
		self,
		commodity_resolver: CommodityPriceResolver,
		rate_resolver: ExchangeRateResolver,
		base_currency: str,
		target_currency: str,
		ounce_to_gram: Decimal = OUNCE_TO_GRAM,
		clock: Callable[[], datetime] = lambda: datetime.now(UTC),
	):
		self.commodity_resolver = commodity_resolver
		self.rate_resolver = rate_resolver
		self.base_currency = base_currency
		self.target_currency = target_currency
		self.ounce_to_gram = ounce_to_gram
		self.clock = clock

	async def get_prices(self) -> AggregateResult:
		# Independent walks; gather is the join point.
		tasks = [
			asyncio.ensure_future(self.commodity_resolver.resolve()),
			asyncio.ensure_future(self.rate_resolver.resolve(self.base_currency, self.target_currency)),
		]
		try:
			commodity, rate = await asyncio.gather(*tasks)
		except BaseException:
			for task in tasks:
				task.cancel()
			await asyncio.gather(*tasks, return_exceptions=True)
			raise

		result = compute_table(commodity, rate, timestamp=self.clock(), ounce_to_gram=self.ounce_to_gram)

		if result.used_fallback:
			fallbacks = [outcome for outcome in (commodity, rate) if isinstance(outcome, Fallback)]
			logger.warning(
				f'Serving prices with fallback data ({result.provenance})',
				extra={
					'extra_data': {
						'fallbacks': {outcome.unit: [str(f) for f in outcome.trail] for outcome in fallbacks},
					}
				},
			)
		else:
			logger.info(f'Gold {self.target_currency}/g 24k = {result.prices.k24} via {result.provenance}')

		return result
