from stock_api.domain.errors import StockApiError
from stock_api.domain.models.result import FetchResult
from stock_api.domain.models.stock import Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.utils.logger import logger


class GetQuoteUseCase:
    """Use case for getting a quote, degrading to synthetic data on provider failure."""

    def __init__(self, provider: MarketDataProvider, fallback_provider: MarketDataProvider):
        self.provider = provider
        self.fallback_provider = fallback_provider

    def execute(self, symbol: str) -> FetchResult[Quote]:
        try:
            return FetchResult.ok(self.provider.get_quote(symbol))
        except StockApiError as e:
            logger.warning(f'Quote fetch failed for {symbol}, using synthetic data: {e.message}')
            return FetchResult.fallback(self.fallback_provider.get_quote(symbol), e)
