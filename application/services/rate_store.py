import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from domain.exceptions.currency import ProviderError
from domain.models.catalog import BASE_CURRENCY, FALLBACK_RATES
from domain.models.currency import RateSnapshot, RefreshState
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = 'Failed to load exchange rates. Please try again.'


def _parse_rate(value: object) -> Decimal | None:
	if isinstance(value, bool):
		return None
	try:
		rate = Decimal(str(value))
	except (InvalidOperation, ValueError, TypeError):
		return None
	if not rate.is_finite() or rate <= 0:
		return None
	return rate


def normalize_rates(raw_rates: Mapping[str, object], base_currency: str) -> dict[str, Decimal]:
	"""Build a rate table from a provider payload.

	Entries that are not positive finite numbers are dropped rather than
	stored as zero. The base currency is always present with a rate of 1.
	"""
	rates: dict[str, Decimal] = {}
	dropped: list[str] = []

	for code, value in raw_rates.items():
		if not isinstance(code, str) or not code.strip():
			dropped.append(repr(code))
			continue
		rate = _parse_rate(value)
		if rate is None:
			dropped.append(code)
			continue
		rates[code.strip().upper()] = rate

	if dropped:
		logger.warning(f'Dropped {len(dropped)} unusable rate entries: {", ".join(dropped)}')

	base_rate = rates.get(base_currency)
	if base_rate is not None and base_rate != 1:
		logger.warning(f'Provider quoted {base_currency} at {base_rate}, forcing it to 1')
	rates[base_currency] = Decimal('1')

	if len(rates) == 1:
		raise ProviderError('Provider returned no usable rates')

	return rates


class RateStore:
	"""Owns the current rate snapshot and mediates refreshes.

	A refresh never raises: acquisition failures install the static fallback
	table and record a message for the caller to surface. The published
	snapshot is swapped by assignment, so readers always see one complete
	table.
	"""

	def __init__(
		self,
		provider: ExchangeRateProvider,
		base_currency: str = BASE_CURRENCY,
		fallback_rates: Mapping[str, Decimal] | None = None,
		clock: Callable[[], datetime] | None = None,
	):
		self.provider = provider
		self.base_currency = base_currency.upper()
		self.fallback_rates = dict(fallback_rates if fallback_rates is not None else FALLBACK_RATES)
		self.fallback_rates[self.base_currency] = Decimal('1')
		self._clock = clock or (lambda: datetime.now(UTC))
		self._snapshot: RateSnapshot | None = None
		self._inflight: asyncio.Future[RateSnapshot] | None = None
		self.last_error: str | None = None

	@property
	def state(self) -> RefreshState:
		if self._snapshot is None:
			return RefreshState.UNINITIALIZED
		return self._snapshot.state

	@property
	def is_refreshing(self) -> bool:
		return self._inflight is not None and not self._inflight.done()

	def current_snapshot(self) -> RateSnapshot | None:
		return self._snapshot

	async def refresh(self) -> RateSnapshot:
		# Requests arriving while an attempt is outstanding join that attempt.
		if not self.is_refreshing:
			self._inflight = asyncio.ensure_future(self._refresh())
		return await asyncio.shield(self._inflight)

	async def _refresh(self) -> RateSnapshot:
		logger.info(f'Refreshing {self.base_currency} rates from {self.provider.name}')
		try:
			raw_rates = await self.provider.fetch_latest_rates(self.base_currency)
			rates = normalize_rates(raw_rates, self.base_currency)
		except ProviderError as e:
			logger.warning(f'Rate acquisition from {self.provider.name} failed: {e}')
			snapshot = self._fallback_snapshot(str(e))
		except Exception as e:
			logger.error(f'Unexpected error refreshing rates: {e}', exc_info=True)
			snapshot = self._fallback_snapshot(f'unexpected error: {e.__class__.__name__}')
		else:
			snapshot = RateSnapshot(
				rates=rates,
				base_currency=self.base_currency,
				timestamp=self._clock(),
				is_live=True,
			)
			self.last_error = None
			logger.info(f'Loaded {len(rates)} live rates from {self.provider.name}')

		self._snapshot = snapshot
		return snapshot

	def _fallback_snapshot(self, reason: str) -> RateSnapshot:
		self.last_error = f'{FALLBACK_MESSAGE} ({reason})'
		logger.warning(f'Using fallback rates for {len(self.fallback_rates)} currencies')
		return RateSnapshot(
			rates=self.fallback_rates,
			base_currency=self.base_currency,
			timestamp=self._clock(),
			is_live=False,
			error=self.last_error,
		)
