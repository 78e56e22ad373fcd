from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from domain.models.catalog import get_currency


def _fixed(value: Decimal, places: int, grouping: bool = False) -> str:
	with localcontext() as ctx:
		ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
		rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
	return format(rounded, f'{"," if grouping else ""}.{places}f')


def format_amount(value: Decimal, currency_code: str) -> str:
	"""Two decimals with thousands separators, followed by the currency symbol."""
	text = _fixed(value, 2, grouping=True)
	currency = get_currency(currency_code)
	return f'{text} {currency.symbol}' if currency else text


def format_rate(from_currency: str, to_currency: str, rate: Decimal | None) -> str:
	if rate is None:
		return 'Rate unavailable'
	return f'1 {from_currency} = {_fixed(rate, 4)} {to_currency}'


def format_timestamp(timestamp: datetime) -> str:
	return timestamp.astimezone().strftime('%H:%M:%S')
