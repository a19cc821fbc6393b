from typing import List

from stock_api.domain.errors import StockApiError
from stock_api.domain.models.result import FetchResult
from stock_api.domain.models.stock import MAX_HISTORY_DAYS, HistoricalPoint
from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.utils.logger import logger


class GetHistoryUseCase:
    """Use case for getting up to 30 daily closes, oldest first."""

    def __init__(self, provider: MarketDataProvider, fallback_provider: MarketDataProvider):
        self.provider = provider
        self.fallback_provider = fallback_provider

    def execute(self, symbol: str, days: int = MAX_HISTORY_DAYS) -> FetchResult[List[HistoricalPoint]]:
        days = max(1, min(days, MAX_HISTORY_DAYS))
        try:
            points = self.provider.get_history(symbol, days)
            return FetchResult.ok(points[-days:])
        except StockApiError as e:
            logger.warning(f'History fetch failed for {symbol}, using synthetic data: {e.message}')
            return FetchResult.fallback(self.fallback_provider.get_history(symbol, days), e)
