from typing import List

from fastapi import APIRouter, Depends, HTTPException

from stock_api.domain.errors import StockApiError
from stock_api.domain.models.prediction import (
    AnalyzeRequest,
    CompareRequest,
    Prediction,
    PredictionRequest,
    StockAnalysis,
    StockComparison,
)
from stock_api.domain.models.stock import normalize_symbol
from stock_api.domain.usecases.predictions.analyze_stock import AnalyzeStockUseCase
from stock_api.domain.usecases.predictions.compare_stocks import CompareStocksUseCase
from stock_api.domain.usecases.predictions.get_cached_prediction import GetCachedPredictionUseCase
from stock_api.domain.usecases.predictions.predict_stock_price import PredictStockPriceUseCase
from stock_api.presentation.factories.usecase_factory import (
    build_analyze_use_case,
    build_cached_prediction_use_case,
    build_compare_use_case,
    build_predict_use_case,
)
from stock_api.presentation.routes.router import DefaultRouter
from stock_api.utils.logger import logger

router = APIRouter(route_class=DefaultRouter)


@router.post('/predict',
             summary='Prediz o preço do próximo pregão',
             response_model=Prediction)
def predict_price(
    request: PredictionRequest,
    use_case: PredictStockPriceUseCase = Depends(build_predict_use_case)
):
    """
    Gera (ou reutiliza do cache do dia) a predição do próximo fechamento.

    Usa o Gemini quando GEMINI_API_KEY está configurada e cai para o algoritmo
    heurístico em qualquer falha; o campo `method` informa qual foi usado.
    """
    try:
        return use_case.execute(
            symbol=request.symbol,
            current_price=request.current_price,
            historical_data=request.historical_data,
        )
    except StockApiError:
        raise
    except Exception as e:
        logger.error(f'Erro na predição: {str(e)}')
        raise HTTPException(status_code=500, detail='Failed to generate prediction') from e


@router.get('/{symbol}/cached',
            summary='Retorna a predição do dia em cache',
            response_model=Prediction)
def get_cached_prediction(
    symbol: str,
    use_case: GetCachedPredictionUseCase = Depends(build_cached_prediction_use_case)
):
    """Retorna a predição armazenada hoje para o símbolo, ou 404."""
    try:
        symbol = normalize_symbol(symbol)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return use_case.execute(symbol)


@router.post('/analyze',
             summary='Cotação, histórico e predição de uma ação',
             response_model=StockAnalysis)
def analyze_stock(
    request: AnalyzeRequest,
    use_case: AnalyzeStockUseCase = Depends(build_analyze_use_case)
):
    """Executa o fluxo completo da página de predição em uma chamada."""
    result = use_case.execute(request.symbol)
    logger.info(f'Análise concluída: {request.symbol} (degraded={result.degraded})')
    return result


@router.post('/compare',
             summary='Compara até 5 ações com projeção de preços',
             response_model=List[StockComparison])
def compare_stocks(
    request: CompareRequest,
    use_case: CompareStocksUseCase = Depends(build_compare_use_case)
):
    """Retorna cotação, histórico e projeção de N dias para cada símbolo."""
    return use_case.execute(request.symbols, days=request.days)
