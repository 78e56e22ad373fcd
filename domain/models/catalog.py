from decimal import Decimal

from domain.models.currency import Currency, CurrencyPair

BASE_CURRENCY = 'USD'

CURRENCIES: tuple[Currency, ...] = (
    Currency(code='USD', name='US Dollar', symbol='$'),
    Currency(code='EUR', name='Euro', symbol='€'),
    Currency(code='GBP', name='British Pound', symbol='£'),
    Currency(code='JPY', name='Japanese Yen', symbol='¥'),
    Currency(code='CAD', name='Canadian Dollar', symbol='C$'),
    Currency(code='AUD', name='Australian Dollar', symbol='A$'),
    Currency(code='CHF', name='Swiss Franc', symbol='CHF'),
    Currency(code='CNY', name='Chinese Yuan', symbol='¥'),
    Currency(code='INR', name='Indian Rupee', symbol='₹'),
    Currency(code='BRL', name='Brazilian Real', symbol='R$'),
)

# Units per 1 USD; only used when the live provider cannot be reached.
FALLBACK_RATES: dict[str, Decimal] = {
    'USD': Decimal('1'),
    'EUR': Decimal('0.85'),
    'GBP': Decimal('0.73'),
    'JPY': Decimal('110.0'),
    'CAD': Decimal('1.25'),
    'AUD': Decimal('1.35'),
    'CHF': Decimal('0.92'),
    'CNY': Decimal('6.45'),
    'INR': Decimal('74.5'),
    'BRL': Decimal('5.2'),
}

POPULAR_PAIRS: tuple[CurrencyPair, ...] = (
    CurrencyPair('USD', 'EUR'),
    CurrencyPair('USD', 'GBP'),
    CurrencyPair('EUR', 'GBP'),
    CurrencyPair('USD', 'JPY'),
)

_BY_CODE = {currency.code: currency for currency in CURRENCIES}


def get_currency(code: str) -> Currency | None:
    return _BY_CODE.get(code.upper())
