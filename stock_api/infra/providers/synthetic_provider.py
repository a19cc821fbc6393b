import random
import time
from typing import Callable, List, Optional

from stock_api.domain.models.stock import MAX_HISTORY_DAYS, HistoricalPoint, Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider

BASE_PRICES = {
    'AAPL': 180,
    'GOOGL': 140,
    'MSFT': 380,
    'AMZN': 145,
    'TSLA': 250,
    'META': 320,
    'NFLX': 450,
    'NVDA': 480,
    'SPY': 450,
    'QQQ': 380,
}

DAILY_VOLATILITY = 0.02
DAY_MS = 24 * 60 * 60 * 1000


class SyntheticProvider(MarketDataProvider):
    """Generates plausible demo data; used when no live provider is available."""

    name = 'synthetic'

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], float] = time.time):
        self.rng = rng or random.Random()
        self.clock = clock

    def base_price(self, symbol: str) -> float:
        """Fixed base price for known symbols, random in [100, 300) otherwise."""
        base = BASE_PRICES.get(symbol.upper())
        if base is None:
            return 100 + self.rng.random() * 200
        return float(base)

    def get_quote(self, symbol: str) -> Quote:
        base = self.base_price(symbol)
        change_percent = self.rng.uniform(-4, 4)
        change = base * change_percent / 100
        price = base + change

        return Quote(
            symbol=symbol.upper(),
            price=round(price, 2),
            change=round(change, 2),
            change_percent=round(change_percent, 2),
            high=round(price * 1.02, 2),
            low=round(price * 0.98, 2),
            volume=self.rng.randrange(1_000_000, 11_000_000),
        )

    def get_history(self, symbol: str, days: int = MAX_HISTORY_DAYS) -> List[HistoricalPoint]:
        """Random walk of ±2% per day ending today, oldest first."""
        price = self.base_price(symbol)
        now_ms = int(self.clock() * 1000)
        points = []

        for i in range(days - 1, -1, -1):
            price = price * (1 + self.rng.uniform(-DAILY_VOLATILITY, DAILY_VOLATILITY))
            points.append(HistoricalPoint(
                timestamp=now_ms - i * DAY_MS,
                price=round(max(price, 0.01), 2),
                volume=self.rng.randrange(1_000_000, 6_000_000),
            ))

        return points
