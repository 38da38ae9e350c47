from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_price_aggregator
from api.schemas import ErrorResponse, GoldPriceResponse, HealthResponse
from application.services import PriceAggregator
from config.settings import Settings, get_settings

router = APIRouter(tags=['gold'])


@router.get(
	'/api/gold',
	response_model=GoldPriceResponse,
	status_code=status.HTTP_200_OK,
	summary='Current gold price per gram by karat',
	responses={500: {'model': ErrorResponse}},
)
async def get_gold_prices(
	response: Response,
	aggregator: Annotated[PriceAggregator, Depends(get_price_aggregator)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> GoldPriceResponse:
	result = await aggregator.get_prices()

	max_age = settings.CACHE_MAX_AGE_SECONDS
	response.headers['cache-control'] = f'public, max-age={max_age}, s-maxage={max_age}'
	return GoldPriceResponse.from_result(result)


@router.get('/health', response_model=HealthResponse, summary='Liveness probe')
async def health(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
	return HealthResponse(status='ok', app=settings.APP_NAME)
