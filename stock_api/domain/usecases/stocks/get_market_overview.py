from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from stock_api.domain.errors import StockApiError
from stock_api.domain.models.stock import Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.utils.logger import logger

MAX_WORKERS = 8


class GetMarketOverviewUseCase:
    """Use case for fetching several quotes concurrently; failed symbols are dropped."""

    def __init__(self, provider: MarketDataProvider):
        self.provider = provider

    def _fetch(self, symbol: str) -> Optional[Quote]:
        try:
            return self.provider.get_quote(symbol)
        except StockApiError as e:
            logger.warning(f'Failed to fetch {symbol}: {e.message}')
            return None

    def execute(self, symbols: List[str]) -> List[Quote]:
        unique = list(dict.fromkeys(symbols))
        if not unique:
            return []

        with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(unique))) as executor:
            results = list(executor.map(self._fetch, unique))

        return [quote for quote in results if quote is not None]
