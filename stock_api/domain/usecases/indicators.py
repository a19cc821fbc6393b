"""
Indicadores numéricos usados pela predição heurística e pelo snapshot técnico.

Todas as séries de preços são ordenadas do mais antigo ao mais recente.
"""

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from stock_api.domain.models.stock import TechnicalSnapshot

TECHNICAL_WINDOW = 14
RSI_PERIOD = 14
BULLISH_RSI = 65.0
BEARISH_RSI = 35.0
SUPPORT_FACTOR = 0.98
RESISTANCE_FACTOR = 1.02


def mean(values: Sequence[float]) -> float:
    return float(np.mean(np.asarray(values, dtype=float)))


def linear_regression_slope(values: Sequence[float]) -> float:
    """Least-squares slope of `values` against x = 0..n-1; 0.0 when n < 2."""
    n = len(values)
    if n < 2:
        return 0.0

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)
    denominator = n * np.sum(x * x) - np.sum(x) ** 2
    return float((n * np.sum(x * y) - np.sum(x) * np.sum(y)) / denominator)


def log_returns(prices: Sequence[float]) -> np.ndarray:
    """ln(p[i+1] / p[i]) for each consecutive pair of positive prices."""
    p = np.asarray(prices, dtype=float)
    if p.size < 2:
        return np.array([])

    prev, nxt = p[:-1], p[1:]
    valid = (prev > 0) & (nxt > 0)
    return np.log(nxt[valid] / prev[valid])


def volatility(prices: Sequence[float]) -> float:
    """Population standard deviation of the log returns."""
    returns = log_returns(prices)
    if returns.size == 0:
        return 0.0
    return float(np.std(returns))


def rolling_rsi(closes: Sequence[float], period: int = RSI_PERIOD) -> Optional[float]:
    """Rolling-mean RSI of the latest close; None when there is not enough data."""
    if len(closes) <= period:
        return None

    series = pd.Series(closes, dtype=float)
    delta = series.diff()
    up = delta.clip(lower=0)
    down = -delta.clip(upper=0)
    roll_up = up.rolling(period).mean()
    roll_down = down.rolling(period).mean()
    rs = roll_up / (roll_down + 1e-9)
    value = (100 - (100 / (1 + rs))).iloc[-1]

    if pd.isna(value):
        return None
    return float(min(100.0, max(0.0, value)))


def estimate_technicals(closes: Sequence[float]) -> Optional[TechnicalSnapshot]:
    """
    Trend, RSI and a ±2% support/resistance band from the latest closes.

    Trend compares the newest close against the mean of the last 14 closes.
    The RSI falls back to a fixed bullish/bearish constant when the series
    is too short for a 14-period value.
    """
    if not closes:
        return None

    window = list(closes)[-TECHNICAL_WINDOW:]
    current = window[-1]
    bullish = current > mean(window)

    rsi = rolling_rsi(closes)
    if rsi is None:
        rsi = BULLISH_RSI if bullish else BEARISH_RSI

    return TechnicalSnapshot(
        rsi=round(rsi, 2),
        trend='bullish' if bullish else 'bearish',
        support=min(window) * SUPPORT_FACTOR,
        resistance=max(window) * RESISTANCE_FACTOR,
    )
