import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import (
	CurrencyNotFoundError,
	DegenerateRateError,
	InvalidAmountError,
	SnapshotUnavailableError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(CurrencyNotFoundError)
	async def currency_not_found_handler(request: Request, exc: CurrencyNotFoundError):
		return JSONResponse(status_code=404, content={'detail': str(exc)})

	@app.exception_handler(InvalidAmountError)
	async def invalid_amount_handler(request: Request, exc: InvalidAmountError):
		return JSONResponse(status_code=422, content={'detail': str(exc)})

	@app.exception_handler(DegenerateRateError)
	async def degenerate_rate_handler(request: Request, exc: DegenerateRateError):
		logger.error(f'Degenerate rate: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)

	@app.exception_handler(SnapshotUnavailableError)
	async def snapshot_unavailable_handler(request: Request, exc: SnapshotUnavailableError):
		return JSONResponse(status_code=503, content={'detail': str(exc)})
