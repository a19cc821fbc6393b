from typing import List

import pandas as pd
import yfinance as yf

from stock_api.domain.errors import NotFoundError, UpstreamError
from stock_api.domain.models.stock import MAX_HISTORY_DAYS, HistoricalPoint, Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider


class YFinanceProvider(MarketDataProvider):
    """Market data from Yahoo Finance; needs no API key."""

    name = 'yfinance'

    def _download(self, symbol: str, n: int) -> pd.DataFrame:
        """Last N daily OHLCV rows for the symbol, oldest first."""
        try:
            raw = yf.download(symbol, period=f'{n + 10}d', auto_adjust=True, progress=False)
        except Exception as e:
            raise UpstreamError(f'Unable to fetch data for {symbol}: {e}') from e

        if raw is None or raw.empty:
            raise NotFoundError(f'Stock {symbol} not found')

        if isinstance(raw.columns, pd.MultiIndex):
            raw.columns = raw.columns.get_level_values(0)
        raw = raw.rename(columns=str.title)

        missing = {'High', 'Low', 'Close', 'Volume'} - set(raw.columns)
        if missing:
            raise UpstreamError(f'Malformed data for {symbol}: missing {sorted(missing)}')

        frame = raw[['High', 'Low', 'Close', 'Volume']].dropna().tail(n)
        if frame.empty:
            raise NotFoundError(f'Stock {symbol} not found')
        return frame

    def get_quote(self, symbol: str) -> Quote:
        frame = self._download(symbol, 2)
        last = frame.iloc[-1]
        price = float(last['Close'])
        previous = float(frame.iloc[-2]['Close']) if len(frame) > 1 else price
        change = price - previous
        volume = int(last['Volume'])

        return Quote(
            symbol=symbol,
            price=round(price, 2),
            change=round(change, 2),
            change_percent=round(change / previous * 100, 2) if previous else 0.0,
            high=round(float(last['High']), 2),
            low=round(float(last['Low']), 2),
            volume=volume,
        )

    def get_history(self, symbol: str, days: int = MAX_HISTORY_DAYS) -> List[HistoricalPoint]:
        frame = self._download(symbol, min(days, MAX_HISTORY_DAYS))
        return [
            HistoricalPoint(
                timestamp=int(pd.Timestamp(index).timestamp() * 1000),
                price=float(row['Close']),
                volume=int(row['Volume']),
            )
            for index, row in frame.iterrows()
        ]
