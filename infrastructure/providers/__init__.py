from .base import ProviderSpec, dig, select
from .commodity import COMMODITY_PROVIDERS
from .exchange import RATE_PROVIDERS

__all__ = ['ProviderSpec', 'dig', 'select', 'COMMODITY_PROVIDERS', 'RATE_PROVIDERS']
