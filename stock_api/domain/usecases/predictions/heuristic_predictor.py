import random
from typing import Optional

from stock_api.domain.models.prediction import MAX_CONFIDENCE, MIN_CONFIDENCE, PredictionEstimate
from stock_api.domain.repositories.predictor import PredictionContext, Predictor
from stock_api.domain.usecases.indicators import linear_regression_slope, mean, volatility

MIN_HISTORY = 5
SHORT_WINDOW = 5
LONG_WINDOW = 10
MAX_DAILY_CHANGE = 0.05

CROSSOVER_NUDGE = 0.01
TREND_WEIGHT = 0.5
MOMENTUM_WEIGHT = 0.3

BASE_CONFIDENCE = 70
CROSSOVER_CONFIDENCE = 5
SHORT_HISTORY_CONFIDENCE = 65


class HeuristicPredictor(Predictor):
    """
    Deterministic next-day prediction from moving averages, trend, momentum
    and volatility.

    The predicted move blends a moving-average crossover nudge with the
    normalized regression slope and 5-day momentum, and is clamped to
    min(5%, 2 x volatility). Confidence starts at 75 and drops by
    100 x volatility, bounded to [50, 95].

    With fewer than 5 historical closes the prediction is the current price
    with up to ±1% random noise and a fixed confidence of 65.
    """

    method = 'heuristic'

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def predict(self, context: PredictionContext) -> PredictionEstimate:
        current_price = context.current_price
        history = list(context.history)

        if len(history) < MIN_HISTORY:
            return PredictionEstimate(
                predicted_price=current_price * (1 + self.rng.uniform(-0.01, 0.01)),
                confidence=SHORT_HISTORY_CONFIDENCE,
                method=self.method,
            )

        short_ma = mean(history[-SHORT_WINDOW:])
        long_ma = mean(history[-LONG_WINDOW:])
        vol = volatility(history)
        trend = self._trend(history[-LONG_WINDOW:])
        momentum = self._momentum(current_price, history)

        factor = 0.0
        confidence = BASE_CONFIDENCE
        # Both crossover directions raise confidence by the same amount.
        if short_ma > long_ma:
            factor += CROSSOVER_NUDGE
        else:
            factor -= CROSSOVER_NUDGE
        confidence += CROSSOVER_CONFIDENCE

        factor += trend * TREND_WEIGHT
        factor += momentum * MOMENTUM_WEIGHT

        max_change = min(MAX_DAILY_CHANGE, vol * 2)
        factor = max(-max_change, min(max_change, factor))

        confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence - vol * 100))

        return PredictionEstimate(
            predicted_price=current_price * (1 + factor),
            confidence=round(confidence),
            method=self.method,
        )

    @staticmethod
    def _trend(window) -> float:
        """Regression slope relative to the window mean; 0 when the mean is 0."""
        window_mean = mean(window)
        if window_mean == 0:
            return 0.0
        return linear_regression_slope(window) / window_mean

    @staticmethod
    def _momentum(current_price: float, history) -> float:
        lookback = history[max(0, len(history) - SHORT_WINDOW)]
        if lookback == 0:
            return 0.0
        return (current_price - lookback) / lookback
