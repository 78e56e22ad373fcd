import logging
from datetime import datetime

from application.services import conversion_engine
from application.services.formatting import format_amount, format_rate, format_timestamp
from application.services.rate_store import RateStore
from domain.exceptions.currency import (
	CurrencyException,
	CurrencyNotFoundError,
	DegenerateRateError,
	InvalidAmountError,
	SnapshotUnavailableError,
)
from domain.models.currency import ConversionRequest, ConversionResult, CurrencyPair, RateSnapshot

logger = logging.getLogger(__name__)


class ConverterSession:
	"""Interactive converter state for a presentation layer.

	Every mutator finishes with ``recompute()``. An invalid amount keeps the
	previous result on display; a missing currency or unusable rate withholds
	it.
	"""

	def __init__(
		self,
		rate_store: RateStore,
		amount: str = '1',
		from_currency: str = 'USD',
		to_currency: str = 'EUR',
	):
		self.rate_store = rate_store
		self.amount = amount
		self.from_currency = from_currency.upper()
		self.to_currency = to_currency.upper()
		self.result: ConversionResult | None = None
		self.error: CurrencyException | None = None

	@property
	def snapshot(self) -> RateSnapshot | None:
		return self.rate_store.current_snapshot()

	@property
	def request(self) -> ConversionRequest:
		return ConversionRequest(self.amount, self.from_currency, self.to_currency)

	@property
	def is_loading(self) -> bool:
		return self.rate_store.is_refreshing

	@property
	def banner(self) -> str | None:
		snapshot = self.snapshot
		return snapshot.error if snapshot is not None else None

	@property
	def last_updated(self) -> str | None:
		snapshot = self.snapshot
		return format_timestamp(snapshot.timestamp) if snapshot is not None else None

	@property
	def formatted_result(self) -> str | None:
		if self.result is None:
			return None
		return format_amount(self.result.converted_amount, self.result.to_currency)

	@property
	def rate_display(self) -> str | None:
		snapshot = self.snapshot
		if snapshot is None:
			return None
		rate = conversion_engine.implied_rate(self.from_currency, self.to_currency, snapshot)
		if rate is None:
			return None
		return format_rate(self.from_currency, self.to_currency, rate)

	def set_amount(self, amount: str) -> ConversionResult | None:
		self.amount = amount
		return self.recompute()

	def select_from(self, code: str) -> ConversionResult | None:
		self.from_currency = code.upper()
		return self.recompute()

	def select_to(self, code: str) -> ConversionResult | None:
		self.to_currency = code.upper()
		return self.recompute()

	def swap_currencies(self) -> ConversionResult | None:
		self.from_currency, self.to_currency = conversion_engine.swap(
			self.from_currency, self.to_currency
		)
		return self.recompute()

	def quick_convert(self, pair: CurrencyPair) -> ConversionResult | None:
		self.from_currency = pair.from_currency
		self.to_currency = pair.to_currency
		return self.recompute()

	async def refresh(self) -> RateSnapshot:
		snapshot = await self.rate_store.refresh()
		self.recompute()
		return snapshot

	def recompute(self) -> ConversionResult | None:
		snapshot = self.snapshot
		if snapshot is None:
			self.error = SnapshotUnavailableError('Exchange rates are not yet available')
			return self.result

		request = self.request
		try:
			self.result = conversion_engine.convert(
				request.amount, request.from_currency, request.to_currency, snapshot
			)
		except InvalidAmountError as e:
			self.error = e
		except (CurrencyNotFoundError, DegenerateRateError) as e:
			logger.debug(f'Conversion {self.from_currency}->{self.to_currency} withheld: {e}')
			self.error = e
			self.result = None
		else:
			self.error = None
		return self.result
