"""
Insights de mercado baseados em regras, calculados a partir das cotações
do overview: sentimento por ação, sentimento agregado e destaques.
"""

import random
from typing import List, Optional

from stock_api.domain.errors import NotFoundError
from stock_api.domain.models.insight import KeyInsight, MarketInsights, MarketSentiment, StockInsight
from stock_api.domain.models.stock import Quote
from stock_api.domain.usecases.stocks.get_market_overview import GetMarketOverviewUseCase

DEFAULT_SYMBOLS = ['AAPL', 'GOOGL', 'MSFT', 'AMZN']
MAX_KEY_INSIGHTS = 4
HIGH_VOLUME = 10_000_000

STOCK_NAMES = {
    'AAPL': 'Apple Inc.',
    'GOOGL': 'Alphabet Inc.',
    'MSFT': 'Microsoft Corporation',
    'AMZN': 'Amazon.com Inc.',
    'TSLA': 'Tesla Inc.',
    'META': 'Meta Platforms Inc.',
    'NFLX': 'Netflix Inc.',
    'NVDA': 'NVIDIA Corporation',
}

ANALYSIS_TEMPLATES = {
    'bullish': [
        '{symbol} is currently {action} {move:.2f}% with {volume}. '
        'Technical indicators suggest continued upward momentum with strong market support.',
        'Real-time data shows {symbol} trading at ${price:.2f} with positive sentiment. '
        'Current price action indicates potential for further gains.',
        '{symbol} demonstrates strong fundamentals with current price of ${price:.2f}. '
        'Market data suggests this uptrend may continue.',
    ],
    'bearish': [
        '{symbol} is {action} {move:.2f}% on {volume}. '
        'Technical analysis suggests caution as downward pressure persists.',
        'Current market data shows {symbol} at ${price:.2f} facing headwinds. '
        'Risk management strategies should be considered.',
        '{symbol} displays weakness with recent price action. '
        'At ${price:.2f}, the stock may face further challenges in the near term.',
    ],
}


def recommendation_for(sentiment: str, confidence: float) -> str:
    if sentiment == 'bullish':
        return 'Strong Buy' if confidence > 75 else 'Buy'
    return 'Strong Sell' if confidence > 75 else 'Sell'


def risk_level_for(confidence: float) -> str:
    if confidence > 80:
        return 'Low'
    if confidence > 65:
        return 'Medium'
    return 'High'


def volatility_label(volatility: float) -> str:
    if volatility > 3:
        return 'High'
    if volatility > 1:
        return 'Medium'
    return 'Low'


class GenerateMarketInsightsUseCase:
    """Use case for the market insights page."""

    def __init__(self, overview_use_case: GetMarketOverviewUseCase, rng: Optional[random.Random] = None):
        self.overview_use_case = overview_use_case
        self.rng = rng or random.Random()

    def _stock_insight(self, quote: Quote) -> StockInsight:
        sentiment = 'bullish' if quote.change_percent > 0 else 'bearish'
        confidence = min(95.0, max(60.0, 75 + abs(quote.change_percent) * 2))

        template = self.rng.choice(ANALYSIS_TEMPLATES[sentiment])
        analysis = template.format(
            symbol=quote.symbol,
            action='gaining' if quote.change_percent > 0 else 'declining',
            move=abs(quote.change_percent),
            volume='high volume' if quote.volume > HIGH_VOLUME else 'moderate volume',
            price=quote.price,
        )

        return StockInsight(
            symbol=quote.symbol,
            name=STOCK_NAMES.get(quote.symbol, quote.symbol),
            sentiment=sentiment,
            confidence=round(confidence),
            price=quote.price,
            change_percent=quote.change_percent,
            analysis=analysis,
            recommendation=recommendation_for(sentiment, confidence),
            risk_level=risk_level_for(confidence),
        )

    @staticmethod
    def _key_insights(quotes: List[Quote], avg_change: float, volatility: float) -> List[KeyInsight]:
        insights = []

        if avg_change > 2:
            leader = next((q.symbol for q in quotes if q.symbol in ('AAPL', 'MSFT')), quotes[0].symbol)
            insights.append(KeyInsight(
                type='opportunity',
                title='Strong Market Momentum',
                description=f'Market showing strong bullish momentum with {avg_change:.2f}% average gains. '
                            f'Tech leaders like {leader} driving the rally.',
            ))
        elif avg_change < -2:
            insights.append(KeyInsight(
                type='watch',
                title='Market Correction',
                description=f'Market experiencing {abs(avg_change):.2f}% decline. '
                            'Consider defensive positions and value opportunities emerging.',
            ))
        else:
            insights.append(KeyInsight(
                type='opportunity',
                title='Stable Market Conditions',
                description='Market showing consolidation with low volatility. '
                            'Good environment for selective stock picking and building positions.',
            ))

        if volatility > 3:
            insights.append(KeyInsight(
                type='watch',
                title='High Volatility Alert',
                description=f'Market volatility at {volatility:.1f}%. Expect significant price swings. '
                            'Use tight risk management and consider volatility hedging strategies.',
            ))
        elif volatility < 1:
            insights.append(KeyInsight(
                type='opportunity',
                title='Low Volatility Window',
                description=f'Current volatility at {volatility:.1f}% provides stable trading environment. '
                            'Good time for leveraged strategies and momentum plays.',
            ))
        else:
            insights.append(KeyInsight(
                type='watch',
                title='Moderate Market Activity',
                description=f'Balanced volatility at {volatility:.1f}%. '
                            'Monitor key support/resistance levels for breakout opportunities.',
            ))

        top = max(quotes, key=lambda q: q.change_percent)
        worst = min(quotes, key=lambda q: q.change_percent)

        if top.change_percent > 2:
            insights.append(KeyInsight(
                type='opportunity',
                title=f'{top.symbol} Leading Gains',
                description=f'{top.symbol} up {top.change_percent:.2f}% at ${top.price:.2f}. '
                            'Strong momentum may continue with proper risk management.',
            ))

        if worst.change_percent < -2:
            insights.append(KeyInsight(
                type='watch',
                title=f'{worst.symbol} Under Pressure',
                description=f'{worst.symbol} down {abs(worst.change_percent):.2f}% at ${worst.price:.2f}. '
                            'Monitor for potential reversal or further decline.',
            ))

        return insights[:MAX_KEY_INSIGHTS]

    def execute(self, symbols: Optional[List[str]] = None) -> MarketInsights:
        quotes = self.overview_use_case.execute(symbols or DEFAULT_SYMBOLS)
        if not quotes:
            raise NotFoundError('Unable to fetch real stock data. Please check API connectivity.')

        avg_change = sum(q.change_percent for q in quotes) / len(quotes)
        volatility = abs(avg_change)

        return MarketInsights(
            stocks=[self._stock_insight(q) for q in quotes],
            market_sentiment=MarketSentiment(
                overall='bullish' if avg_change > 0 else 'bearish',
                fear_greed_index=round(50 + avg_change * 10),
                volatility=volatility_label(volatility),
            ),
            key_insights=self._key_insights(quotes, avg_change, volatility),
        )
