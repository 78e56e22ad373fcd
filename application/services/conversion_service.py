from decimal import Decimal

from application.services import conversion_engine
from application.services.rate_store import RateStore
from domain.exceptions.currency import SnapshotUnavailableError
from domain.models.catalog import POPULAR_PAIRS
from domain.models.currency import ConversionResult, CurrencyPair, RateSnapshot


class ConversionService:
	def __init__(self, rate_store: RateStore):
		self.rate_store = rate_store

	def snapshot(self) -> RateSnapshot:
		snapshot = self.rate_store.current_snapshot()
		if snapshot is None:
			raise SnapshotUnavailableError('Exchange rates are not yet available')
		return snapshot

	def convert(self, amount: object, from_currency: str, to_currency: str) -> ConversionResult:
		return conversion_engine.convert(amount, from_currency, to_currency, self.snapshot())

	def implied_rate(self, from_currency: str, to_currency: str) -> Decimal | None:
		return conversion_engine.implied_rate(from_currency, to_currency, self.snapshot())

	def popular_pairs(self) -> list[tuple[CurrencyPair, Decimal | None]]:
		snapshot = self.snapshot()
		return [
			(pair, conversion_engine.implied_rate(pair.from_currency, pair.to_currency, snapshot))
			for pair in POPULAR_PAIRS
		]
