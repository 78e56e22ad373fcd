import logging
from typing import Annotated

from fastapi import Depends

from application.services import ConversionService, RateStore
from config.settings import get_settings
from infrastructure.providers import ExchangeRateAPIProvider, ExchangeRateProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	provider: ExchangeRateProvider | None = None
	rate_store: RateStore | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.provider = ExchangeRateAPIProvider(
		base_url=settings.RATES_API_URL,
		timeout=settings.PROVIDER_TIMEOUT,
		retries=settings.PROVIDER_RETRIES,
		backoff=settings.PROVIDER_BACKOFF,
	)
	deps.rate_store = RateStore(provider=deps.provider, base_currency=settings.BASE_CURRENCY)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.provider:
		await deps.provider.close()

	logger.info('Cleanup complete')


async def bootstrap() -> None:
	"""Load the first rate snapshot. Called after init_dependencies() at startup."""
	logger.info('Bootstrapping application...')

	if deps.rate_store is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	snapshot = await deps.rate_store.refresh()

	logger.info(f'Bootstrap complete ({snapshot.state.value}, {len(snapshot.rates)} currencies)')


def get_rate_store() -> RateStore:
	if deps.rate_store is None:
		raise RuntimeError('Rate store not initialized')
	return deps.rate_store


def get_conversion_service(
	rate_store: Annotated[RateStore, Depends(get_rate_store)],
) -> ConversionService:
	return ConversionService(rate_store=rate_store)
