from .responses import ErrorResponse, GoldPriceResponse, HealthResponse, PriceTableResponse

__all__ = [
	'ErrorResponse',
	'GoldPriceResponse',
	'HealthResponse',
	'PriceTableResponse',
]
