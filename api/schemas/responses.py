from datetime import datetime

from pydantic import BaseModel, Field

from domain.models.gold import AggregateResult


class PriceTableResponse(BaseModel):
	k24: float = Field(..., description='24 karat price per gram')
	k22: float = Field(..., description='22 karat price per gram')
	k21: float = Field(..., description='21 karat price per gram')
	k18: float = Field(..., description='18 karat price per gram')


class GoldPriceResponse(BaseModel):
	prices: PriceTableResponse
	updated: datetime = Field(..., description='When the prices were resolved')
	source: str = Field(..., description='Providers of the spot price and exchange rate, or fallback')

	model_config = {
		'json_schema_extra': {
			'example': {
				'prices': {'k24': 23.469, 'k22': 21.513, 'k21': 20.535, 'k18': 17.602},
				'updated': '2025-09-27T10:30:00Z',
				'source': 'metals.live × frankfurter.app',
			}
		}
	}

	@classmethod
	def from_result(cls, result: AggregateResult) -> 'GoldPriceResponse':
		return cls(
			prices=PriceTableResponse(**{karat: float(price) for karat, price in result.prices.as_dict().items()}),
			updated=result.timestamp,
			source=result.provenance,
		)


class ErrorResponse(BaseModel):
	error: str
	detail: str


class HealthResponse(BaseModel):
	status: str
	app: str
