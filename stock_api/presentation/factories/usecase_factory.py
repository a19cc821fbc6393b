from typing import Optional

from fastapi import Depends

from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.domain.repositories.predictor import Predictor
from stock_api.domain.usecases.insights.generate_market_insights import GenerateMarketInsightsUseCase
from stock_api.domain.usecases.predictions.analyze_stock import AnalyzeStockUseCase
from stock_api.domain.usecases.predictions.compare_stocks import CompareStocksUseCase
from stock_api.domain.usecases.predictions.get_cached_prediction import GetCachedPredictionUseCase
from stock_api.domain.usecases.predictions.predict_stock_price import PredictStockPriceUseCase
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_market_overview import GetMarketOverviewUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase
from stock_api.domain.usecases.stocks.get_technicals import GetTechnicalsUseCase
from stock_api.presentation.factories.predictor_factory import build_ai_predictor, build_fallback_predictor
from stock_api.presentation.factories.provider_factory import build_fallback_provider, build_market_data_provider
from stock_api.presentation.factories.repository_factory import build_prediction_repository


def build_quote_use_case(
    provider: MarketDataProvider = Depends(build_market_data_provider),
    fallback_provider: MarketDataProvider = Depends(build_fallback_provider),
) -> GetQuoteUseCase:
    return GetQuoteUseCase(provider, fallback_provider)


def build_history_use_case(
    provider: MarketDataProvider = Depends(build_market_data_provider),
    fallback_provider: MarketDataProvider = Depends(build_fallback_provider),
) -> GetHistoryUseCase:
    return GetHistoryUseCase(provider, fallback_provider)


def build_overview_use_case(
    provider: MarketDataProvider = Depends(build_market_data_provider),
) -> GetMarketOverviewUseCase:
    return GetMarketOverviewUseCase(provider)


def build_technicals_use_case(
    history_use_case: GetHistoryUseCase = Depends(build_history_use_case),
) -> GetTechnicalsUseCase:
    return GetTechnicalsUseCase(history_use_case)


def build_predict_use_case(
    repository: PredictionRepository = Depends(build_prediction_repository),
    fallback_predictor: Predictor = Depends(build_fallback_predictor),
    ai_predictor: Optional[Predictor] = Depends(build_ai_predictor),
    quote_use_case: GetQuoteUseCase = Depends(build_quote_use_case),
) -> PredictStockPriceUseCase:
    return PredictStockPriceUseCase(
        repository=repository,
        fallback_predictor=fallback_predictor,
        ai_predictor=ai_predictor,
        quote_use_case=quote_use_case,
    )


def build_cached_prediction_use_case(
    repository: PredictionRepository = Depends(build_prediction_repository),
) -> GetCachedPredictionUseCase:
    return GetCachedPredictionUseCase(repository)


def build_analyze_use_case(
    quote_use_case: GetQuoteUseCase = Depends(build_quote_use_case),
    history_use_case: GetHistoryUseCase = Depends(build_history_use_case),
    predict_use_case: PredictStockPriceUseCase = Depends(build_predict_use_case),
) -> AnalyzeStockUseCase:
    return AnalyzeStockUseCase(quote_use_case, history_use_case, predict_use_case)


def build_compare_use_case(
    quote_use_case: GetQuoteUseCase = Depends(build_quote_use_case),
    history_use_case: GetHistoryUseCase = Depends(build_history_use_case),
) -> CompareStocksUseCase:
    return CompareStocksUseCase(quote_use_case, history_use_case)


def build_insights_use_case(
    overview_use_case: GetMarketOverviewUseCase = Depends(build_overview_use_case),
) -> GenerateMarketInsightsUseCase:
    return GenerateMarketInsightsUseCase(overview_use_case)
