import random
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence

from stock_api.domain.models.prediction import ProjectedPrice, StockComparison
from stock_api.domain.usecases.indicators import linear_regression_slope, mean
from stock_api.domain.usecases.predictions.predict_stock_price import utc_today
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase

PROJECTION_WINDOW = 10
MIN_PROJECTION_HISTORY = 5
NOISE_FRACTION = 0.01


def project_prices(
    closes: Sequence[float],
    days: int,
    start: date,
    rng: Optional[random.Random] = None,
) -> List[ProjectedPrice]:
    """
    Extrapolate the 10-day moving average along the regression slope.

    Each day adds up to ±0.5% of the average as noise and is floored at 1.
    Fewer than 5 closes yields no projection.
    """
    if len(closes) < MIN_PROJECTION_HISTORY:
        return []

    rng = rng or random.Random()
    window = list(closes)[-PROJECTION_WINDOW:]
    average = mean(window)
    slope = linear_regression_slope(window)

    projections = []
    for i in range(1, days + 1):
        noise = rng.uniform(-0.5, 0.5) * average * NOISE_FRACTION
        projections.append(ProjectedPrice(
            date=(start + timedelta(days=i)).isoformat(),
            predicted_price=round(max(1.0, average + slope * i + noise), 2),
        ))
    return projections


class CompareStocksUseCase:
    """Use case for side-by-side data and short projections of up to 5 stocks."""

    def __init__(
        self,
        quote_use_case: GetQuoteUseCase,
        history_use_case: GetHistoryUseCase,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.quote_use_case = quote_use_case
        self.history_use_case = history_use_case
        self.rng = rng or random.Random()
        self.today = today

    def execute(self, symbols: List[str], days: int = 5) -> List[StockComparison]:
        start = self.today()
        comparisons = []

        for symbol in symbols:
            quote_result = self.quote_use_case.execute(symbol)
            history_result = self.history_use_case.execute(symbol)
            history = history_result.unwrap()

            comparisons.append(StockComparison(
                symbol=symbol,
                quote=quote_result.unwrap(),
                history=history,
                projections=project_prices([p.price for p in history], days, start, self.rng),
                degraded=quote_result.is_degraded or history_result.is_degraded,
            ))

        return comparisons
