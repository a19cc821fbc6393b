import math
import random
import statistics

import pytest

from stock_api.domain.repositories.predictor import PredictionContext, Predictor
from stock_api.domain.usecases.predictions.heuristic_predictor import HeuristicPredictor
from stock_api.infra.clients.gemini_predictor import GeminiPredictor


def _predict(current_price, history, seed=0):
    predictor = HeuristicPredictor(rng=random.Random(seed))
    return predictor.predict(PredictionContext(symbol='TEST', current_price=current_price, history=history))


def _volatility(history):
    returns = [math.log(b / a) for a, b in zip(history, history[1:])]
    return statistics.pstdev(returns)


@pytest.mark.parametrize('history', [[], [100.0], [100.0, 101.0, 99.0, 102.0]])
def test_short_history_stays_within_one_percent(history):
    for seed in range(25):
        estimate = _predict(200.0, history, seed)
        assert estimate.confidence == 65
        assert abs(estimate.predicted_price / 200.0 - 1) <= 0.01
        assert estimate.method == 'heuristic'


def test_rising_series_example():
    history = [100.0 + i for i in range(10)]
    estimate = _predict(110.0, history)

    vol = _volatility(history)
    # Crossover, trend and momentum all push up, so the move saturates at the bound.
    assert estimate.predicted_price == pytest.approx(110.0 * (1 + min(0.05, vol * 2)))
    assert estimate.confidence == 75


def test_falling_series_predicts_lower_price():
    history = [110.0 - i for i in range(10)]
    estimate = _predict(100.0, history)

    vol = _volatility(history)
    assert estimate.predicted_price == pytest.approx(100.0 * (1 - min(0.05, vol * 2)))
    assert estimate.predicted_price < 100.0


def test_same_inputs_give_same_prediction():
    history = [100.0, 103.0, 98.0, 105.0, 107.0, 102.0, 110.0]
    first = _predict(111.0, history, seed=1)
    second = _predict(111.0, history, seed=2)
    assert first == second


def test_bounds_hold_for_random_walks():
    rng = random.Random(42)
    for _ in range(200):
        length = rng.randint(5, 30)
        price = rng.uniform(10, 500)
        history = []
        for _ in range(length):
            price *= 1 + rng.uniform(-0.08, 0.08)
            history.append(price)
        current = history[-1] * (1 + rng.uniform(-0.05, 0.05))

        estimate = _predict(current, history)
        vol = _volatility(history)

        assert 50 <= estimate.confidence <= 95
        assert abs(estimate.predicted_price / current - 1) <= min(0.05, 2 * vol) + 1e-12


def test_high_volatility_floors_confidence():
    history = [100.0, 150.0, 80.0, 160.0, 70.0, 170.0]
    estimate = _predict(120.0, history)
    assert estimate.confidence == 50
    assert abs(estimate.predicted_price / 120.0 - 1) <= 0.05 + 1e-12


def test_zero_prices_do_not_produce_nan():
    estimate = _predict(10.0, [0.0, 0.0, 0.0, 0.0, 0.0])
    assert estimate.predicted_price == pytest.approx(10.0)
    assert estimate.confidence == 75


def test_each_strategy_declares_its_own_method():
    assert not hasattr(Predictor, 'method')
    assert HeuristicPredictor.method == 'heuristic'
    assert GeminiPredictor.method == 'ai'
