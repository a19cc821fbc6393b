from conftest import FakeProvider, make_history, make_quote
from stock_api.domain.errors import RateLimitedError, UpstreamError
from stock_api.domain.models.result import ResultStatus
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_market_overview import GetMarketOverviewUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase
from stock_api.domain.usecases.stocks.get_technicals import GetTechnicalsUseCase


def test_quote_from_live_provider(fake_provider, synthetic_provider):
    result = GetQuoteUseCase(fake_provider, synthetic_provider).execute('AAPL')

    assert result.is_ok
    assert result.source == 'live'
    assert result.data.price == 185.5


def test_quote_falls_back_to_synthetic(synthetic_provider):
    provider = FakeProvider(failures={'AAPL': RateLimitedError('quota')})
    result = GetQuoteUseCase(provider, synthetic_provider).execute('AAPL')

    assert result.status is ResultStatus.FALLBACK
    assert result.source == 'synthetic'
    assert isinstance(result.error, RateLimitedError)
    assert result.unwrap().symbol == 'AAPL'


def test_history_is_capped_to_thirty_points(synthetic_provider):
    provider = FakeProvider(histories={'AAPL': make_history([float(i) for i in range(1, 61)])})
    result = GetHistoryUseCase(provider, synthetic_provider).execute('AAPL', days=90)

    assert result.is_ok
    assert len(result.data) == 30
    assert result.data[-1].price == 60.0


def test_history_falls_back_to_synthetic(synthetic_provider):
    provider = FakeProvider(failures={'TSLA': UpstreamError('down')})
    result = GetHistoryUseCase(provider, synthetic_provider).execute('TSLA')

    assert result.is_degraded
    assert len(result.data) == 30


def test_overview_drops_failed_symbols(fake_provider):
    quotes = GetMarketOverviewUseCase(fake_provider).execute(['AAPL', 'ZZZZ'])
    assert [q.symbol for q in quotes] == ['AAPL']


def test_overview_keeps_order_and_deduplicates():
    provider = FakeProvider(quotes={s: make_quote(s) for s in ['AAPL', 'MSFT', 'NVDA']})
    quotes = GetMarketOverviewUseCase(provider).execute(['NVDA', 'AAPL', 'NVDA', 'MSFT'])

    assert [q.symbol for q in quotes] == ['NVDA', 'AAPL', 'MSFT']
    assert sorted(provider.quote_calls) == ['AAPL', 'MSFT', 'NVDA']


def test_overview_of_nothing():
    assert GetMarketOverviewUseCase(FakeProvider()).execute([]) == []


def test_technicals_carry_history_status(fake_provider, synthetic_provider):
    history = GetHistoryUseCase(fake_provider, synthetic_provider)

    live = GetTechnicalsUseCase(history).execute('AAPL')
    assert live.is_ok
    assert live.data.trend == 'bullish'

    degraded = GetTechnicalsUseCase(history).execute('UNKNOWN')
    assert degraded.is_degraded
    assert degraded.data.support < degraded.data.resistance
