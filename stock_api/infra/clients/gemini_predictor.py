import json
import math
from typing import Optional

from stock_api.domain.errors import UpstreamFormatError
from stock_api.domain.models.prediction import MAX_CONFIDENCE, MIN_CONFIDENCE, PredictionEstimate
from stock_api.domain.repositories.predictor import PredictionContext, Predictor
from stock_api.infra.clients.gemini_client import GeminiClient

PROMPT_HISTORY_LENGTH = 30


def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced {...} substring of `text`, or None."""
    start = text.find('{')
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def build_prompt(context: PredictionContext) -> str:
    lines = [
        'You are a professional stock market analyst. '
        f'Analyze the following data for {context.symbol} and provide a price prediction for the next trading day.',
        '',
        'Current Market Data:',
        f'- Current Price: ${context.current_price}',
    ]

    quote = context.quote
    if quote is not None:
        lines += [
            f'- Daily Change: {quote.change_percent}%',
            f'- Day High: ${quote.high}',
            f'- Day Low: ${quote.low}',
            f'- Volume: {quote.volume}',
        ]
        if quote.market_cap is not None:
            lines.append(f'- Market Cap: ${quote.market_cap}')

    technicals = context.technicals
    if technicals is not None:
        lines += [
            '',
            'Technical Indicators:',
            f'- RSI: {technicals.rsi}',
            f'- Trend: {technicals.trend}',
            f'- Support: ${technicals.support:.2f}',
            f'- Resistance: ${technicals.resistance:.2f}',
        ]

    recent = ', '.join(str(p) for p in context.history[-PROMPT_HISTORY_LENGTH:])
    lines += [
        '',
        f'Historical Prices (last {PROMPT_HISTORY_LENGTH} days): [{recent}]',
        '',
        'Based on this data, provide:',
        '1. A predicted price for tomorrow (be realistic, typically within ±5% of current price)',
        f'2. Confidence level ({MIN_CONFIDENCE}-{MAX_CONFIDENCE}%)',
        '3. Brief reasoning (2-3 sentences)',
        '',
        'Respond in JSON format:',
        '{',
        '  "price": number,',
        '  "confidence": number,',
        '  "reasoning": "string"',
        '}',
    ]
    return '\n'.join(lines)


class GeminiPredictor(Predictor):
    """Next-day prediction delegated to Gemini; the reply must contain a JSON object."""

    method = 'ai'

    def __init__(self, client: GeminiClient):
        self.client = client

    def predict(self, context: PredictionContext) -> PredictionEstimate:
        text = self.client.generate(build_prompt(context))

        raw = extract_json_object(text)
        if raw is None:
            raise UpstreamFormatError('Invalid response format from Gemini')

        try:
            result = json.loads(raw)
            price = float(result['price'])
            confidence = float(result.get('confidence', MIN_CONFIDENCE))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise UpstreamFormatError('Invalid response format from Gemini') from e

        if not (math.isfinite(price) and math.isfinite(confidence)):
            raise UpstreamFormatError('Invalid response format from Gemini')
        if price <= 0:
            raise UpstreamFormatError(f'Gemini returned a non-positive price: {price}')

        reasoning = result.get('reasoning')
        return PredictionEstimate(
            predicted_price=price,
            confidence=round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))),
            method=self.method,
            reasoning=str(reasoning) if reasoning is not None else None,
        )
