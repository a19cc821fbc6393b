from datetime import datetime, timezone
from typing import Any, List, Optional

import requests

from stock_api.domain.errors import (
    ConfigError,
    NotFoundError,
    RateLimitedError,
    UpstreamError,
)
from stock_api.domain.models.stock import MAX_HISTORY_DAYS, HistoricalPoint, Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider

ERROR_KEYS = ('Error Message', 'error', 'Note', 'Information')


class FmpProvider(MarketDataProvider):
    """Market data from the Financial Modeling Prep REST API."""

    name = 'fmp'

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = 'https://financialmodelingprep.com/api/v3',
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigError('FINANCIAL_MODELING_PREP_API_KEY not configured')
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        # Overview calls this provider from worker threads; without an injected
        # session every request goes through requests.get.
        self.session = session

    def _get(self, path: str, symbol: str, **params) -> Any:
        params['apikey'] = self.api_key
        try:
            http = self.session or requests
            response = http.get(f'{self.base_url}/{path}', params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f'Unable to fetch data for {symbol}: {e}') from e

        if response.status_code == 429:
            raise RateLimitedError(f'Rate limit reached while fetching {symbol}')
        if response.status_code == 404:
            raise NotFoundError(f'Stock {symbol} not found')
        if not response.ok:
            raise UpstreamError(f'Unable to fetch data for {symbol}: HTTP {response.status_code}')

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f'Malformed payload for {symbol}') from e

        self._raise_for_error_payload(data, symbol)
        return data

    @staticmethod
    def _raise_for_error_payload(data: Any, symbol: str):
        if not isinstance(data, dict):
            return
        for key in ERROR_KEYS:
            message = data.get(key)
            if not message:
                continue
            if 'limit' in str(message).lower() or key in ('Note', 'Information'):
                raise RateLimitedError(f'Rate limit reached while fetching {symbol}')
            raise NotFoundError(f'Stock {symbol} not found')

    def get_quote(self, symbol: str) -> Quote:
        data = self._get(f'quote/{symbol}', symbol)
        if not isinstance(data, list) or not data:
            raise NotFoundError(f'Stock {symbol} not found')

        item = data[0]
        try:
            price = float(item['price'])
            volume = int(item.get('volume') or 0)
            market_cap = item.get('marketCap') or round(price * volume / 1_000_000)
            return Quote(
                symbol=item.get('symbol', symbol),
                price=price,
                change=float(item.get('change') or 0.0),
                change_percent=float(item.get('changesPercentage') or 0.0),
                high=float(item.get('dayHigh') or price),
                low=float(item.get('dayLow') or price),
                volume=volume,
                market_cap=float(market_cap),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f'Malformed quote payload for {symbol}') from e

    def get_history(self, symbol: str, days: int = MAX_HISTORY_DAYS) -> List[HistoricalPoint]:
        days = min(days, MAX_HISTORY_DAYS)
        data = self._get(f'historical-price-full/{symbol}', symbol, timeseries=days)

        historical = data.get('historical') if isinstance(data, dict) else None
        if not historical:
            raise NotFoundError(f'Historical data for {symbol} not found')

        try:
            # Provider returns newest first.
            points = [self._to_point(item) for item in historical[:days]]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f'Malformed historical payload for {symbol}') from e

        points.reverse()
        return points

    @staticmethod
    def _to_point(item: dict) -> HistoricalPoint:
        date = datetime.strptime(item['date'][:10], '%Y-%m-%d').replace(tzinfo=timezone.utc)
        return HistoricalPoint(
            timestamp=int(date.timestamp() * 1000),
            price=float(item['close']),
            volume=int(item.get('volume') or 0),
        )
