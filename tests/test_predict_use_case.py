import random
from datetime import date

import pytest

from conftest import FakeProvider, make_quote
from stock_api.domain.errors import CacheError, NotFoundError, UpstreamError, UpstreamFormatError
from stock_api.domain.models.prediction import Prediction, PredictionEstimate
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.domain.repositories.predictor import Predictor
from stock_api.domain.usecases.predictions.analyze_stock import AnalyzeStockUseCase
from stock_api.domain.usecases.predictions.get_cached_prediction import GetCachedPredictionUseCase
from stock_api.domain.usecases.predictions.heuristic_predictor import HeuristicPredictor
from stock_api.domain.usecases.predictions.predict_stock_price import PredictStockPriceUseCase
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase

TODAY = date(2024, 1, 1)
HISTORY = [100.0 + i for i in range(10)]


class RecordingPredictor(Predictor):
    method = 'ai'

    def __init__(self, estimate=None, error=None):
        self.estimate = estimate
        self.error = error
        self.contexts = []

    def predict(self, context):
        self.contexts.append(context)
        if self.error is not None:
            raise self.error
        return self.estimate


class BrokenRepository(PredictionRepository):
    def get(self, symbol, prediction_date):
        raise CacheError('database is locked')

    def upsert(self, prediction):
        raise CacheError('database is locked')

    def ping(self):
        return False


def _use_case(repository, ai_predictor=None, quote_use_case=None):
    return PredictStockPriceUseCase(
        repository=repository,
        fallback_predictor=HeuristicPredictor(rng=random.Random(0)),
        ai_predictor=ai_predictor,
        quote_use_case=quote_use_case,
        today=lambda: TODAY,
    )


def test_heuristic_prediction_is_cached(repository):
    prediction = _use_case(repository).execute('aapl', 110.0, HISTORY)

    assert prediction.symbol == 'AAPL'
    assert prediction.prediction_date == '2024-01-01'
    assert prediction.method == 'heuristic'
    assert prediction.confidence == 75
    assert repository.get('AAPL', '2024-01-01') == prediction


def test_cached_prediction_is_reused_the_same_day(repository):
    first = _use_case(repository).execute('AAPL', 110.0, HISTORY)
    second = _use_case(repository).execute('AAPL', 999.0, [1.0, 2.0])

    assert second == first


def test_ai_prediction_is_used_when_configured(repository, synthetic_provider):
    ai = RecordingPredictor(PredictionEstimate(predicted_price=112.0, confidence=81, method='ai', reasoning='Up.'))
    provider = FakeProvider(quotes={'AAPL': make_quote('AAPL', price=110.0)})
    quote_use_case = GetQuoteUseCase(provider, synthetic_provider)

    prediction = _use_case(repository, ai, quote_use_case).execute('AAPL', 110.0, HISTORY)

    assert prediction.method == 'ai'
    assert prediction.predicted_price == 112.0
    assert prediction.reasoning == 'Up.'
    context = ai.contexts[0]
    assert context.quote.price == 110.0
    assert context.technicals.trend == 'bullish'
    assert context.history == HISTORY


def test_synthetic_quote_is_not_sent_to_ai(repository, synthetic_provider):
    ai = RecordingPredictor(PredictionEstimate(predicted_price=112.0, confidence=81, method='ai'))
    quote_use_case = GetQuoteUseCase(FakeProvider(), synthetic_provider)

    _use_case(repository, ai, quote_use_case).execute('AAPL', 110.0, HISTORY)

    assert ai.contexts[0].quote is None



def test_supplied_quote_skips_provider_lookup(repository, synthetic_provider):
    ai = RecordingPredictor(PredictionEstimate(predicted_price=112.0, confidence=81, method='ai'))
    provider = FakeProvider(quotes={'AAPL': make_quote('AAPL', price=110.0)})
    quote = make_quote('AAPL', price=109.5)

    _use_case(repository, ai, GetQuoteUseCase(provider, synthetic_provider)).execute(
        'AAPL', 110.0, HISTORY, quote=quote
    )

    assert provider.quote_calls == []
    assert ai.contexts[0].quote is quote


def test_analyze_fetches_quote_once_with_ai(repository, fake_provider, synthetic_provider):
    ai = RecordingPredictor(PredictionEstimate(predicted_price=190.0, confidence=80, method='ai'))
    quote_use_case = GetQuoteUseCase(fake_provider, synthetic_provider)
    predict = _use_case(repository, ai, quote_use_case)

    history_use_case = GetHistoryUseCase(fake_provider, synthetic_provider)

    analysis = AnalyzeStockUseCase(quote_use_case, history_use_case, predict).execute('AAPL')

    assert fake_provider.quote_calls == ['AAPL']
    assert analysis.prediction.method == 'ai'
    assert ai.contexts[0].quote.price == 185.5


def test_analyze_with_synthetic_quote_does_not_refetch(repository, synthetic_provider):
    ai = RecordingPredictor(PredictionEstimate(predicted_price=190.0, confidence=80, method='ai'))
    provider = FakeProvider(failures={'AAPL': UpstreamError('Unable to fetch data for AAPL')})
    quote_use_case = GetQuoteUseCase(provider, synthetic_provider)
    predict = _use_case(repository, ai, quote_use_case)

    history_use_case = GetHistoryUseCase(provider, synthetic_provider)

    analysis = AnalyzeStockUseCase(quote_use_case, history_use_case, predict).execute('AAPL')

    assert analysis.degraded is True
    assert provider.quote_calls == ['AAPL']
    assert ai.contexts[0].quote is None


@pytest.mark.parametrize('error', [
    UpstreamFormatError('Invalid response format from Gemini'),
    UpstreamError('Gemini API error: 500'),
])
def test_ai_failure_falls_back_to_heuristic(repository, error):
    prediction = _use_case(repository, RecordingPredictor(error=error)).execute('AAPL', 110.0, HISTORY)

    assert prediction.method == 'heuristic'
    assert prediction.confidence == 75
    assert repository.get('AAPL', '2024-01-01').method == 'heuristic'


def test_cache_failures_do_not_fail_prediction():
    prediction = _use_case(BrokenRepository()).execute('AAPL', 110.0, HISTORY)
    assert isinstance(prediction, Prediction)
    assert prediction.method == 'heuristic'


def test_get_cached_prediction(repository):
    use_case = GetCachedPredictionUseCase(repository, today=lambda: TODAY)
    with pytest.raises(NotFoundError):
        use_case.execute('AAPL')

    stored = _use_case(repository).execute('AAPL', 110.0, HISTORY)
    assert use_case.execute('AAPL') == stored


def test_get_cached_prediction_treats_cache_failure_as_miss():
    with pytest.raises(NotFoundError):
        GetCachedPredictionUseCase(BrokenRepository(), today=lambda: TODAY).execute('AAPL')
