from typing import Protocol


class ExchangeRateProvider(Protocol):
	@property
	def name(self) -> str: ...

	async def fetch_latest_rates(self, base_currency: str) -> dict[str, object]:
		"""Return the raw ``rates`` object quoted against ``base_currency``.

		Implementations raise ``ProviderError`` for every transport, HTTP or
		payload failure.
		"""
		...

	async def close(self) -> None: ...
