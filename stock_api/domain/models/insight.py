from typing import List, Literal

from stock_api.domain.models.stock import CamelModel


class StockInsight(CamelModel):
    """Sentimento e recomendação para uma ação."""
    symbol: str
    name: str
    sentiment: Literal['bullish', 'bearish']
    confidence: int
    price: float
    change_percent: float
    analysis: str
    recommendation: str
    risk_level: Literal['Low', 'Medium', 'High']


class MarketSentiment(CamelModel):
    """Sentimento agregado do mercado."""
    overall: Literal['bullish', 'bearish']
    fear_greed_index: int
    volatility: Literal['High', 'Medium', 'Low']


class KeyInsight(CamelModel):
    """Destaque textual do mercado."""
    type: Literal['opportunity', 'watch']
    title: str
    description: str


class MarketInsights(CamelModel):
    """Resposta da rota de insights."""
    stocks: List[StockInsight]
    market_sentiment: MarketSentiment
    key_insights: List[KeyInsight]
