from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    symbol: str


@dataclass(frozen=True)
class CurrencyPair:
    from_currency: str
    to_currency: str


class RefreshState(Enum):
    UNINITIALIZED = 'uninitialized'
    LIVE = 'live'
    FALLBACK = 'fallback'


@dataclass(frozen=True)
class RateSnapshot:
    """A complete rate table quoted against ``base_currency``.

    ``rates`` holds units of each currency per one unit of the base. The
    mapping is wrapped read-only on construction so a published snapshot can
    be shared between readers without copying.
    """

    rates: Mapping[str, Decimal]
    base_currency: str
    timestamp: datetime
    is_live: bool
    error: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'rates', MappingProxyType(dict(self.rates)))

    def __contains__(self, code: object) -> bool:
        return code in self.rates

    def get_rate(self, code: str) -> Decimal | None:
        return self.rates.get(code)

    @property
    def currencies(self) -> list[str]:
        return sorted(self.rates)

    @property
    def state(self) -> RefreshState:
        return RefreshState.LIVE if self.is_live else RefreshState.FALLBACK


@dataclass(frozen=True)
class ConversionRequest:
    amount: object
    from_currency: str
    to_currency: str


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: Decimal
    converted_amount: Decimal
    implied_rate: Decimal  # units of to_currency per unit of from_currency
    timestamp: datetime
    is_live: bool = True
