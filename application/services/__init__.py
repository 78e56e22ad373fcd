from .conversion_service import ConversionService
from .converter_session import ConverterSession
from .rate_store import RateStore

__all__ = ['ConversionService', 'ConverterSession', 'RateStore']
