from decimal import Decimal
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Gold Price API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False
	HOST: str = '0.0.0.0'  # nosec B104
	PORT: int = 8000

	# Currency pair
	BASE_CURRENCY: str = 'USD'
	TARGET_CURRENCY: str = 'KWD'

	# Transport
	FETCH_TIMEOUT_MS: int = 6000
	FETCH_RETRIES: int = 2
	BACKOFF_BASE_MS: int = 300

	# Exchange rate plausibility band (exclusive) and last-known-good values
	VALID_MIN_RATE: Decimal = Decimal('0.25')
	VALID_MAX_RATE: Decimal = Decimal('0.40')
	SAFE_FALLBACK_RATE: Decimal = Decimal('0.308')
	SAFE_FALLBACK_COMMODITY_PRICE: Decimal = Decimal('2350.00')

	OUNCE_TO_GRAM: Decimal = Decimal('31.1034768')

	CACHE_MAX_AGE_SECONDS: int = 10

	# Priority order, first entry is tried first
	COMMODITY_PROVIDERS: list[str] = ['metals.live', 'metals.live/gold', 'goldprice.org', 'coinbase-paxg']
	RATE_PROVIDERS: list[str] = ['frankfurter.app', 'open.er-api.com', 'exchangerate.host']

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@model_validator(mode='after')
	def check_rate_band(self) -> 'Settings':
		if self.VALID_MIN_RATE >= self.VALID_MAX_RATE:
			raise ValueError('VALID_MIN_RATE must be lower than VALID_MAX_RATE')
		if not self.VALID_MIN_RATE < self.SAFE_FALLBACK_RATE < self.VALID_MAX_RATE:
			raise ValueError('SAFE_FALLBACK_RATE must lie inside the valid rate band')
		if self.SAFE_FALLBACK_COMMODITY_PRICE <= 0 or self.OUNCE_TO_GRAM <= 0:
			raise ValueError('SAFE_FALLBACK_COMMODITY_PRICE and OUNCE_TO_GRAM must be positive')
		return self

	@property
	def fetch_timeout_seconds(self) -> float:
		return self.FETCH_TIMEOUT_MS / 1000

	@property
	def backoff_base_seconds(self) -> float:
		return self.BACKOFF_BASE_MS / 1000


@lru_cache
def get_settings() -> Settings:
	return Settings()
