from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_conversion_service, get_rate_store
from api.schemas import (
	ConversionResponse,
	CurrencyPairRequest,
	CurrencyResponse,
	ExchangeRateResponse,
	HealthResponse,
	PopularPairResponse,
	RateSnapshotResponse,
	SupportedCurrenciesResponse,
	SwapResponse,
)
from application.services import ConversionService, RateStore
from application.services.conversion_engine import swap
from application.services.formatting import format_amount, format_rate, format_timestamp
from domain.exceptions.currency import CurrencyNotFoundError, DegenerateRateError
from domain.models.catalog import CURRENCIES
from domain.models.currency import RateSnapshot, RefreshState

router = APIRouter(prefix='/api', tags=['currency'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


def _snapshot_response(snapshot: RateSnapshot) -> RateSnapshotResponse:
	return RateSnapshotResponse(
		base_currency=snapshot.base_currency,
		rates=dict(snapshot.rates),
		timestamp=snapshot.timestamp,
		last_updated=format_timestamp(snapshot.timestamp),
		is_live=snapshot.is_live,
		error=snapshot.error,
	)


@router.post(
	'/rates/refresh',
	response_model=RateSnapshotResponse,
	status_code=status.HTTP_200_OK,
	summary='Reload exchange rates from the provider',
)
async def refresh_rates(
	store: Annotated[RateStore, Depends(get_rate_store)],
) -> RateSnapshotResponse:
	snapshot = await store.refresh()
	return _snapshot_response(snapshot)


@router.get(
	'/rates',
	response_model=RateSnapshotResponse,
	status_code=status.HTTP_200_OK,
	summary='Current rate table',
)
async def get_rates(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> RateSnapshotResponse:
	return _snapshot_response(service.snapshot())


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	amount: str,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	result = service.convert(amount, from_currency, to_currency)
	return ConversionResponse(
		from_currency=result.from_currency,
		to_currency=result.to_currency,
		original_amount=result.amount,
		converted_amount=result.converted_amount,
		exchange_rate=result.implied_rate,
		formatted_amount=format_amount(result.converted_amount, result.to_currency),
		rate_display=format_rate(result.from_currency, result.to_currency, result.implied_rate),
		timestamp=result.timestamp,
		is_live=result.is_live,
	)


@router.get(
	'/rate/{from_currency}/{to_currency}',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get current exchange rate',
)
async def get_exchange_rate(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ExchangeRateResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()
	snapshot = service.snapshot()

	rate = service.implied_rate(from_currency, to_currency)
	if rate is None:
		for code in (from_currency, to_currency):
			if code not in snapshot:
				raise CurrencyNotFoundError(code)
		r_from = snapshot.get_rate(from_currency)
		code = to_currency if r_from.is_finite() and r_from > 0 else from_currency
		raise DegenerateRateError(code, snapshot.get_rate(code))

	return ExchangeRateResponse(
		from_currency=from_currency,
		to_currency=to_currency,
		rate=rate,
		rate_display=format_rate(from_currency, to_currency, rate),
		timestamp=snapshot.timestamp,
		is_live=snapshot.is_live,
	)


@router.post(
	'/swap',
	response_model=SwapResponse,
	status_code=status.HTTP_200_OK,
	summary='Exchange source and target currencies',
)
async def swap_currencies(pair: CurrencyPairRequest) -> SwapResponse:
	from_currency, to_currency = swap(pair.from_currency, pair.to_currency)
	return SwapResponse(from_currency=from_currency, to_currency=to_currency)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies() -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		currencies=[
			CurrencyResponse(code=c.code, name=c.name, symbol=c.symbol) for c in CURRENCIES
		]
	)


@router.get(
	'/popular-pairs',
	response_model=list[PopularPairResponse],
	status_code=status.HTTP_200_OK,
	summary='Quick conversion pairs with their current rates',
)
async def get_popular_pairs(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> list[PopularPairResponse]:
	return [
		PopularPairResponse(
			from_currency=pair.from_currency,
			to_currency=pair.to_currency,
			rate=rate,
			rate_display=format_rate(pair.from_currency, pair.to_currency, rate),
		)
		for pair, rate in service.popular_pairs()
	]


@router.get(
	'/health',
	response_model=HealthResponse,
	status_code=status.HTTP_200_OK,
	summary='Rate store health',
)
async def health_check(
	store: Annotated[RateStore, Depends(get_rate_store)],
) -> HealthResponse:
	state = store.state
	snapshot = store.current_snapshot()
	health_status = {
		RefreshState.LIVE: 'ok',
		RefreshState.FALLBACK: 'degraded',
		RefreshState.UNINITIALIZED: 'starting',
	}[state]
	return HealthResponse(
		status=health_status,
		state=state.value,
		refreshing=store.is_refreshing,
		last_updated=snapshot.timestamp if snapshot else None,
		error=store.last_error,
	)
