from .requests import CurrencyPairRequest
from .responses import (
	ConversionResponse,
	CurrencyResponse,
	ExchangeRateResponse,
	HealthResponse,
	PopularPairResponse,
	RateSnapshotResponse,
	SupportedCurrenciesResponse,
	SwapResponse,
)

__all__ = [
	'ConversionResponse',
	'CurrencyPairRequest',
	'CurrencyResponse',
	'ExchangeRateResponse',
	'HealthResponse',
	'PopularPairResponse',
	'RateSnapshotResponse',
	'SupportedCurrenciesResponse',
	'SwapResponse',
]
