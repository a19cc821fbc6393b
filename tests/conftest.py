import random
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from stock_api.domain.errors import NotFoundError, StockApiError, UpstreamError
from stock_api.domain.models.stock import HistoricalPoint, Quote
from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.domain.usecases.predictions.heuristic_predictor import HeuristicPredictor
from stock_api.infra.db.database import build_engine, build_session_factory
from stock_api.infra.providers.synthetic_provider import SyntheticProvider
from stock_api.infra.repositories.prediction_repository_impl import PredictionRepositoryImpl


def make_quote(symbol: str, price: float = 100.0, change_percent: float = 1.0, volume: int = 5_000_000) -> Quote:
    return Quote(
        symbol=symbol,
        price=price,
        change=round(price * change_percent / 100, 2),
        change_percent=change_percent,
        high=price * 1.01,
        low=price * 0.99,
        volume=volume,
        market_cap=1_000_000.0,
    )


def make_history(closes: List[float], start_ms: int = 1_704_067_200_000) -> List[HistoricalPoint]:
    day = 24 * 60 * 60 * 1000
    return [
        HistoricalPoint(timestamp=start_ms + i * day, price=close, volume=1_000_000)
        for i, close in enumerate(closes)
    ]


class FakeProvider(MarketDataProvider):
    """In-memory provider; symbols in `failures` raise the given error."""

    name = 'fake'

    def __init__(
        self,
        quotes: Optional[Dict[str, Quote]] = None,
        histories: Optional[Dict[str, List[HistoricalPoint]]] = None,
        failures: Optional[Dict[str, StockApiError]] = None,
    ):
        self.quotes = quotes or {}
        self.histories = histories or {}
        self.failures = failures or {}
        self.quote_calls = []

    def _check(self, symbol: str):
        if symbol in self.failures:
            raise self.failures[symbol]

    def get_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        self._check(symbol)
        if symbol not in self.quotes:
            raise NotFoundError(f'Stock {symbol} not found')
        return self.quotes[symbol]

    def get_history(self, symbol: str, days: int = 30) -> List[HistoricalPoint]:
        self._check(symbol)
        if symbol not in self.histories:
            raise NotFoundError(f'Historical data for {symbol} not found')
        return self.histories[symbol][-days:]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, invalid_json: bool = False):
        self.status_code = status_code
        self.payload = payload
        self.invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self.invalid_json:
            raise ValueError('No JSON object could be decoded')
        return self.payload


class FakeSession:
    """Stands in for requests.Session; records calls and replays canned responses."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls = []

    def _send(self, method: str, url: str, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._send('GET', url, **kwargs)

    def post(self, url, **kwargs):
        return self._send('POST', url, **kwargs)


@pytest.fixture
def session_factory():
    engine = build_engine('sqlite://')
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def repository(session_factory):
    return PredictionRepositoryImpl(session_factory)


@pytest.fixture
def synthetic_provider():
    return SyntheticProvider(rng=random.Random(7))


@pytest.fixture
def fake_provider():
    closes = [100 + i for i in range(30)]
    return FakeProvider(
        quotes={
            'AAPL': make_quote('AAPL', price=185.5, change_percent=1.5),
            'MSFT': make_quote('MSFT', price=410.0, change_percent=-0.5),
        },
        histories={
            'AAPL': make_history(closes),
            'MSFT': make_history([400 - i for i in range(30)]),
        },
        failures={'ZZZZ': UpstreamError('Unable to fetch data for ZZZZ')},
    )


@pytest.fixture
def client(fake_provider, synthetic_provider, repository):
    from stock_api.main import app
    from stock_api.presentation.factories.predictor_factory import build_ai_predictor, build_fallback_predictor
    from stock_api.presentation.factories.provider_factory import build_fallback_provider, build_market_data_provider
    from stock_api.presentation.factories.repository_factory import build_prediction_repository

    app.dependency_overrides[build_market_data_provider] = lambda: fake_provider
    app.dependency_overrides[build_fallback_provider] = lambda: synthetic_provider
    app.dependency_overrides[build_prediction_repository] = lambda: repository
    app.dependency_overrides[build_ai_predictor] = lambda: None
    app.dependency_overrides[build_fallback_predictor] = lambda: HeuristicPredictor(rng=random.Random(1))

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
