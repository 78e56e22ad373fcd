# nosec B101


from datetime import UTC, datetime
from decimal import Decimal

import pytest

from domain.models.catalog import CURRENCIES, FALLBACK_RATES, POPULAR_PAIRS, get_currency
from domain.models.currency import RateSnapshot, RefreshState


def test_fallback_table_covers_catalog():
    assert {c.code for c in CURRENCIES} == set(FALLBACK_RATES)
    assert FALLBACK_RATES['USD'] == Decimal('1')
    assert all(rate > 0 for rate in FALLBACK_RATES.values())


def test_popular_pairs_use_catalog_currencies():
    for pair in POPULAR_PAIRS:
        assert get_currency(pair.from_currency) is not None
        assert get_currency(pair.to_currency) is not None


def test_get_currency_is_case_insensitive():
    assert get_currency('gbp').symbol == '£'
    assert get_currency('XYZ') is None


def test_snapshot_rates_are_read_only():
    source = {'USD': Decimal('1'), 'EUR': Decimal('0.85')}
    snapshot = RateSnapshot(
        rates=source,
        base_currency='USD',
        timestamp=datetime(2025, 11, 5, tzinfo=UTC),
        is_live=True,
    )

    source['EUR'] = Decimal('0.5')

    assert snapshot.get_rate('EUR') == Decimal('0.85')
    with pytest.raises(TypeError):
        snapshot.rates['EUR'] = Decimal('0.1')
    assert 'EUR' in snapshot
    assert snapshot.currencies == ['EUR', 'USD']
    assert snapshot.state == RefreshState.LIVE
