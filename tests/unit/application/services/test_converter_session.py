# nosec B101


from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from application.services.converter_session import ConverterSession
from application.services.rate_store import RateStore
from domain.exceptions.currency import (
    CurrencyNotFoundError,
    InvalidAmountError,
    ProviderError,
    SnapshotUnavailableError,
)
from domain.models.catalog import POPULAR_PAIRS


def make_store(rates=None, error=None):
    provider = AsyncMock()
    provider.name = 'test-provider'
    if error is not None:
        provider.fetch_latest_rates.side_effect = error
    else:
        provider.fetch_latest_rates.return_value = rates
    return RateStore(provider=provider)


@pytest_asyncio.fixture
async def session():
    store = make_store(rates={'EUR': 0.85, 'GBP': 0.73, 'JPY': 110.0})
    session = ConverterSession(store, amount='100')
    await session.refresh()
    return session


def test_recompute_before_first_refresh_reports_unavailable():
    session = ConverterSession(make_store(rates={'EUR': 0.85}))

    assert session.recompute() is None
    assert isinstance(session.error, SnapshotUnavailableError)
    assert session.rate_display is None
    assert session.last_updated is None
    assert session.banner is None


@pytest.mark.asyncio
async def test_refresh_computes_initial_result(session):
    assert session.result.converted_amount == Decimal('85.00')
    assert session.error is None
    assert session.formatted_result == '85.00 €'
    assert session.rate_display == '1 USD = 0.8500 EUR'
    assert session.banner is None
    assert session.last_updated is not None
    assert session.is_loading is False


@pytest.mark.asyncio
async def test_set_amount_recomputes(session):
    session.set_amount('10')

    assert session.result.converted_amount == Decimal('8.50')


@pytest.mark.asyncio
async def test_invalid_amount_keeps_previous_result(session):
    previous = session.result

    result = session.set_amount('abc')

    assert result is previous
    assert session.result is previous
    assert isinstance(session.error, InvalidAmountError)


@pytest.mark.asyncio
async def test_nan_amount_keeps_previous_result(session):
    previous = session.result

    session.set_amount('NaN')

    assert session.result is previous
    assert isinstance(session.error, InvalidAmountError)


@pytest.mark.asyncio
async def test_out_of_range_amount_keeps_previous_result(session):
    previous = session.result

    session.set_amount('1e1000000')

    assert session.result is previous
    assert isinstance(session.error, InvalidAmountError)


@pytest.mark.asyncio
async def test_unknown_currency_withholds_result(session):
    session.select_from('XYZ')

    assert session.result is None
    assert session.formatted_result is None
    assert session.rate_display is None
    assert isinstance(session.error, CurrencyNotFoundError)


@pytest.mark.asyncio
async def test_valid_input_clears_previous_error(session):
    session.set_amount('')
    assert session.error is not None

    session.set_amount('1')

    assert session.error is None
    assert session.result.converted_amount == Decimal('0.85')


@pytest.mark.asyncio
async def test_swap_currencies(session):
    session.swap_currencies()

    assert (session.from_currency, session.to_currency) == ('EUR', 'USD')
    assert round(session.result.converted_amount, 2) == Decimal('117.65')


@pytest.mark.asyncio
async def test_select_to_and_quick_convert(session):
    session.select_to('gbp')
    assert session.result.converted_amount == Decimal('73.00')

    jpy_pair = POPULAR_PAIRS[-1]
    session.quick_convert(jpy_pair)

    assert session.to_currency == 'JPY'
    assert session.result.converted_amount == Decimal('11000.0')
    assert session.formatted_result == '11,000.00 ¥'


@pytest.mark.asyncio
async def test_fallback_refresh_shows_banner_and_still_converts():
    session = ConverterSession(make_store(error=ProviderError('HTTP error 503')), amount='100')

    await session.refresh()

    assert 'Failed to load exchange rates' in session.banner
    assert session.result.converted_amount == Decimal('85.00')
    assert session.result.is_live is False
