from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='Units of target per unit of source')
	formatted_amount: str = Field(..., description='Converted amount for display')
	rate_display: str = Field(..., description='Exchange rate for display')
	timestamp: datetime = Field(..., description='When the rates were obtained')
	is_live: bool = Field(..., description='False when the fallback table was used')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 85.00,
				'exchange_rate': 0.85,
				'formatted_amount': '85.00 €',
				'rate_display': '1 USD = 0.8500 EUR',
				'timestamp': '2025-09-27T10:30:00Z',
				'is_live': True,
			}
		}
	)


class ExchangeRateResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	rate: Decimal = Field(..., description='Units of target per unit of source')
	rate_display: str = Field(..., description='Exchange rate for display')
	timestamp: datetime = Field(..., description='When the rates were obtained')
	is_live: bool = Field(..., description='False when the fallback table was used')


class RateSnapshotResponse(BaseModel):
	base_currency: str = Field(..., description='Pivot currency of the table')
	rates: dict[str, Decimal] = Field(..., description='Units of each currency per base unit')
	timestamp: datetime = Field(..., description='When the refresh happened')
	last_updated: str = Field(..., description='Refresh time for display')
	is_live: bool = Field(..., description='False when the fallback table was used')
	error: str | None = Field(None, description='Why live rates could not be loaded')


class SwapResponse(BaseModel):
	from_currency: str
	to_currency: str


class CurrencyResponse(BaseModel):
	code: str
	name: str
	symbol: str


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[CurrencyResponse] = Field(description='Currency catalog')


class PopularPairResponse(BaseModel):
	from_currency: str
	to_currency: str
	rate: Decimal | None = Field(None, description='Null when either side is unavailable')
	rate_display: str


class HealthResponse(BaseModel):
	status: str = Field(..., description='ok, degraded or starting')
	state: str = Field(..., description='Refresh lifecycle state')
	refreshing: bool
	last_updated: datetime | None = None
	error: str | None = None
