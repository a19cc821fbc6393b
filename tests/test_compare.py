import random
from datetime import date

import pytest

from stock_api.domain.usecases.predictions.compare_stocks import CompareStocksUseCase, project_prices
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase


def test_projection_needs_five_closes():
    assert project_prices([1.0, 2.0, 3.0, 4.0], 5, date(2024, 1, 1)) == []


def test_projection_follows_average_and_slope():
    closes = [100.0 + i for i in range(10)]
    projections = project_prices(closes, 5, date(2024, 1, 30), rng=random.Random(3))

    assert [p.date for p in projections] == ['2024-01-31', '2024-02-01', '2024-02-02', '2024-02-03', '2024-02-04']
    for i, projection in enumerate(projections, start=1):
        assert projection.predicted_price == pytest.approx(104.5 + i, abs=104.5 * 0.005 + 0.01)


def test_projection_is_floored_at_one():
    closes = [10.0, 8.0, 6.0, 4.0, 2.0]
    projections = project_prices(closes, 10, date(2024, 1, 1), rng=random.Random(1))
    assert all(p.predicted_price >= 1.0 for p in projections)
    assert projections[-1].predicted_price == 1.0


def test_compare_stocks(fake_provider, synthetic_provider):
    use_case = CompareStocksUseCase(
        GetQuoteUseCase(fake_provider, synthetic_provider),
        GetHistoryUseCase(fake_provider, synthetic_provider),
        rng=random.Random(0),
        today=lambda: date(2024, 1, 1),
    )
    result = use_case.execute(['AAPL', 'NVDA'], days=3)

    assert [c.symbol for c in result] == ['AAPL', 'NVDA']
    assert result[0].degraded is False
    assert result[1].degraded is True
    assert len(result[0].projections) == 3
    assert result[0].projections[0].date == '2024-01-02'
