from decimal import Decimal, InvalidOperation, Overflow, getcontext, localcontext

from domain.exceptions.currency import CurrencyNotFoundError, DegenerateRateError, InvalidAmountError
from domain.models.currency import ConversionResult, RateSnapshot


def normalize_code(code: str) -> str:
	return code.strip().upper()


def parse_amount(amount: object) -> Decimal:
	if isinstance(amount, Decimal):
		value = amount
	elif isinstance(amount, (int, float, str)) and not isinstance(amount, bool):
		try:
			value = Decimal(str(amount).strip())
		except InvalidOperation as e:
			raise InvalidAmountError(amount) from e
	else:
		raise InvalidAmountError(amount)

	if not value.is_finite():
		raise InvalidAmountError(amount)

	# Outside the context exponent range the arithmetic would overflow or underflow.
	context = getcontext()
	if value and not context.Emin <= value.adjusted() <= context.Emax:
		raise InvalidAmountError(amount)
	return value


def _usable(rate: Decimal) -> bool:
	return rate.is_finite() and rate > 0


def _lookup_rate(snapshot: RateSnapshot, code: str) -> Decimal:
	rate = snapshot.get_rate(code)
	if rate is None:
		raise CurrencyNotFoundError(code)
	return rate


def _pivot_rate(r_from: Decimal, r_to: Decimal, from_currency: str) -> Decimal:
	try:
		with localcontext() as ctx:
			ctx.traps[Overflow] = True
			return (1 / r_from) * r_to
	except (Overflow, InvalidOperation) as e:
		raise DegenerateRateError(from_currency, r_from) from e


def convert(
	amount: object, from_currency: str, to_currency: str, snapshot: RateSnapshot
) -> ConversionResult:
	"""Convert ``amount`` through the snapshot's base currency.

	The two-hop path is taken for every pair, including identical and
	base-currency pairs.
	"""
	value = parse_amount(amount)
	from_currency = normalize_code(from_currency)
	to_currency = normalize_code(to_currency)

	r_from = _lookup_rate(snapshot, from_currency)
	r_to = _lookup_rate(snapshot, to_currency)
	if not _usable(r_from):
		raise DegenerateRateError(from_currency, r_from)
	if not _usable(r_to):
		raise DegenerateRateError(to_currency, r_to)

	try:
		with localcontext() as ctx:
			ctx.traps[Overflow] = True
			base_amount = value / r_from
			converted_amount = base_amount * r_to
	except (Overflow, InvalidOperation) as e:
		raise InvalidAmountError(amount) from e

	return ConversionResult(
		from_currency=from_currency,
		to_currency=to_currency,
		amount=value,
		converted_amount=converted_amount,
		implied_rate=_pivot_rate(r_from, r_to, from_currency),
		timestamp=snapshot.timestamp,
		is_live=snapshot.is_live,
	)


def implied_rate(from_currency: str, to_currency: str, snapshot: RateSnapshot) -> Decimal | None:
	"""Units of ``to_currency`` per unit of ``from_currency``, or None when unavailable."""
	r_from = snapshot.get_rate(normalize_code(from_currency))
	r_to = snapshot.get_rate(normalize_code(to_currency))
	if r_from is None or r_to is None or not _usable(r_from) or not _usable(r_to):
		return None
	try:
		return _pivot_rate(r_from, r_to, from_currency)
	except DegenerateRateError:
		return None


def swap(from_currency: str, to_currency: str) -> tuple[str, str]:
	return to_currency, from_currency
