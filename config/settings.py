from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Rates provider
	BASE_CURRENCY: str = 'USD'
	RATES_API_URL: str = 'https://api.exchangerate-api.com/v4/latest'
	PROVIDER_TIMEOUT: int = 10
	PROVIDER_RETRIES: int = 3
	PROVIDER_BACKOFF: float = 1.0
	REFRESH_ON_STARTUP: bool = True

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	# Application
	APP_NAME: str = 'Currency Converter API'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
