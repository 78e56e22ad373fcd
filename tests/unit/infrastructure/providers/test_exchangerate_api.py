# nosec B101


import pytest
from unittest.mock import Mock, AsyncMock
import httpx

from infrastructure.providers.exchangerate_api import ExchangeRateAPIProvider
from domain.exceptions.currency import ProviderError


def make_response(payload):
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    return mock_response


@pytest.mark.asyncio
async def test_fetch_latest_rates_success_returns_rates_object():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({
        'base': 'USD',
        'date': '2025-11-05',
        'rates': {'USD': 1, 'EUR': 0.85, 'GBP': 0.73}
    })

    provider = ExchangeRateAPIProvider(client=mock_client)

    rates = await provider.fetch_latest_rates('USD')

    assert rates == {'USD': 1, 'EUR': 0.85, 'GBP': 0.73}
    mock_client.get.assert_called_once_with('https://api.exchangerate-api.com/v4/latest/USD')


@pytest.mark.asyncio
async def test_fetch_latest_rates_uses_configured_base_url():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({'rates': {'EUR': 0.85}})

    provider = ExchangeRateAPIProvider(base_url='http://rates.local/latest/', client=mock_client)
    await provider.fetch_latest_rates('USD')

    mock_client.get.assert_called_once_with('http://rates.local/latest/USD')


@pytest.mark.asyncio
async def test_fetch_latest_rates_missing_rates_object():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({'base': 'USD'})

    provider = ExchangeRateAPIProvider(client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'no rates object' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_latest_rates_rates_not_a_mapping():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({'rates': [0.85, 0.73]})

    provider = ExchangeRateAPIProvider(client=mock_client)

    with pytest.raises(ProviderError):
        await provider.fetch_latest_rates('USD')


@pytest.mark.asyncio
async def test_fetch_latest_rates_api_returns_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({
        'result': 'error',
        'error-type': 'unsupported-code'
    })

    provider = ExchangeRateAPIProvider(client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'unsupported-code' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_latest_rates_wrong_base_currency():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = make_response({'base': 'EUR', 'rates': {'USD': 1.17}})

    provider = ExchangeRateAPIProvider(client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'expected USD' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_latest_rates_http_500_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)

    error_response = Mock()
    error_response.status_code = 500
    error_response.text = 'Internal Server Error'

    mock_client.get.side_effect = httpx.HTTPStatusError(
        'Server error',
        request=Mock(),
        response=error_response
    )

    provider = ExchangeRateAPIProvider(client=mock_client, backoff=0)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'HTTP error 500' in str(exc_info.value)
    # status errors are not retried
    assert mock_client.get.call_count == 1


@pytest.mark.asyncio
async def test_fetch_latest_rates_network_timeout_is_retried():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = httpx.TimeoutException('Request timed out')
    provider = ExchangeRateAPIProvider(client=mock_client, retries=3, backoff=0)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'request failed' in str(exc_info.value).lower()
    assert mock_client.get.call_count == 3


@pytest.mark.asyncio
async def test_fetch_latest_rates_recovers_after_transient_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = [
        httpx.ConnectError('Connection refused'),
        make_response({'base': 'USD', 'rates': {'EUR': 0.85}}),
    ]
    provider = ExchangeRateAPIProvider(client=mock_client, retries=2, backoff=0)

    rates = await provider.fetch_latest_rates('USD')

    assert rates == {'EUR': 0.85}
    assert mock_client.get.call_count == 2


@pytest.mark.asyncio
async def test_fetch_latest_rates_invalid_json_response():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.raise_for_status = Mock()
    mock_response.json.side_effect = ValueError('Invalid JSON')
    mock_client.get.return_value = mock_response

    provider = ExchangeRateAPIProvider(client=mock_client)
    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates('USD')

    assert 'parsing error' in str(exc_info.value).lower()


@pytest.mark.asyncio
async def test_close_closes_client():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    provider = ExchangeRateAPIProvider(client=mock_client)

    await provider.close()

    mock_client.aclose.assert_awaited_once()
