import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.gold import AggregationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(AggregationError)
	async def aggregation_error_handler(request: Request, exc: AggregationError):
		logger.error(f'Aggregation failed: {exc}', exc_info=exc)
		return JSONResponse(status_code=500, content={'error': 'fetch failed', 'detail': str(exc)})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=exc)
		return JSONResponse(
			status_code=500, content={'error': 'fetch failed', 'detail': str(exc) or exc.__class__.__name__}
		)
