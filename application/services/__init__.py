from .aggregator import PriceAggregator, compute_table
from .resolvers import CommodityPriceResolver, ExchangeRateResolver
from .validation import FinitePositive, WithinBand

__all__ = [
	'CommodityPriceResolver',
	'ExchangeRateResolver',
	'FinitePositive',
	'PriceAggregator',
	'WithinBand',
	'compute_table',
]
