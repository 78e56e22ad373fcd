import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import ProviderError


class ExchangeRateAPIProvider:
	BASE_URL = 'https://api.exchangerate-api.com/v4/latest'

	def __init__(
		self,
		base_url: str | None = None,
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
		retries: int = 3,
		backoff: float = 1.0,
	):
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self.retries = max(1, retries)
		self.backoff = backoff
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'exchangerate-api'

	async def _get(self, url: str) -> httpx.Response:
		async for attempt in AsyncRetrying(
			stop=stop_after_attempt(self.retries),
			wait=wait_exponential(multiplier=self.backoff, max=10),
			retry=retry_if_exception_type(httpx.TransportError),
			reraise=True,
		):
			with attempt:
				response = await self._client.get(url)
		return response

	async def _request(self, endpoint: str) -> dict:
		url = f'{self.base_url}/{endpoint}'

		try:
			response = await self._get(url)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'ExchangeRate-API HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'ExchangeRate-API request failed: {e.__class__.__name__}') from e
		except Exception as e:
			raise ProviderError(f'ExchangeRate-API response parsing error: {str(e)}') from e

		if not isinstance(data, dict):
			raise ProviderError('ExchangeRate-API response parsing error: expected a JSON object')

		if data.get('result') == 'error':
			raise ProviderError(f"ExchangeRate-API error: {data.get('error-type', 'Unknown error')}")

		return data

	async def fetch_latest_rates(self, base_currency: str) -> dict[str, object]:
		data = await self._request(base_currency)

		rates = data.get('rates')
		if not isinstance(rates, dict):
			raise ProviderError('ExchangeRate-API payload has no rates object')

		quoted_base = data.get('base', data.get('base_code'))
		if quoted_base is not None and str(quoted_base).upper() != base_currency:
			raise ProviderError(
				f'ExchangeRate-API returned rates for {quoted_base}, expected {base_currency}'
			)

		return rates

	async def close(self) -> None:
		await self._client.aclose()
