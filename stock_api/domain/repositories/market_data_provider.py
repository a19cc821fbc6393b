from abc import ABC, abstractmethod
from typing import List

from stock_api.domain.models.stock import HistoricalPoint, Quote


class MarketDataProvider(ABC):
    """Interface for market data sources (live APIs or synthetic)."""

    name = 'provider'

    @abstractmethod
    def get_quote(self, symbol: str) -> Quote:
        """Get the current quote; raises NotFoundError/RateLimitedError/UpstreamError."""
        pass

    @abstractmethod
    def get_history(self, symbol: str, days: int = 30) -> List[HistoricalPoint]:
        """Get up to `days` daily closes, oldest first."""
        pass
