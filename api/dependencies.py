import logging

from application.services import CommodityPriceResolver, ExchangeRateResolver, PriceAggregator
from config.settings import Settings, get_settings
from infrastructure.http import FetchClient
from infrastructure.providers import COMMODITY_PROVIDERS, RATE_PROVIDERS, select

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	fetch_client: FetchClient | None = None
	aggregator: PriceAggregator | None = None


deps = AppDependencies()


def build_aggregator(settings: Settings, fetch_client: FetchClient) -> PriceAggregator:
	commodity_resolver = CommodityPriceResolver(
		fetch_client=fetch_client,
		providers=select(COMMODITY_PROVIDERS, settings.COMMODITY_PROVIDERS),
		fallback_price=settings.SAFE_FALLBACK_COMMODITY_PRICE,
	)
	rate_resolver = ExchangeRateResolver(
		fetch_client=fetch_client,
		providers=select(RATE_PROVIDERS, settings.RATE_PROVIDERS),
		fallback_rate=settings.SAFE_FALLBACK_RATE,
		min_rate=settings.VALID_MIN_RATE,
		max_rate=settings.VALID_MAX_RATE,
	)
	return PriceAggregator(
		commodity_resolver=commodity_resolver,
		rate_resolver=rate_resolver,
		base_currency=settings.BASE_CURRENCY.upper(),
		target_currency=settings.TARGET_CURRENCY.upper(),
		ounce_to_gram=settings.OUNCE_TO_GRAM,
	)


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.fetch_client = FetchClient(
		timeout=settings.fetch_timeout_seconds,
		retries=settings.FETCH_RETRIES,
		backoff_base=settings.backoff_base_seconds,
	)
	deps.aggregator = build_aggregator(settings, deps.fetch_client)
	logger.info(
		f'Dependencies initialized: commodity={settings.COMMODITY_PROVIDERS} '
		f'rate={settings.RATE_PROVIDERS} pair={settings.BASE_CURRENCY}/{settings.TARGET_CURRENCY}'
	)


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.fetch_client:
		await deps.fetch_client.close()
	deps.fetch_client = None
	deps.aggregator = None

	logger.info('Cleanup complete')


def get_price_aggregator() -> PriceAggregator:
	if deps.aggregator is None:
		raise RuntimeError('Price aggregator not initialized')
	return deps.aggregator
