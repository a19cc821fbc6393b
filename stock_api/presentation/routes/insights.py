from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from stock_api.domain.models.insight import MarketInsights
from stock_api.domain.models.stock import MAX_OVERVIEW_SYMBOLS, normalize_symbol
from stock_api.domain.usecases.insights.generate_market_insights import GenerateMarketInsightsUseCase
from stock_api.presentation.factories.usecase_factory import build_insights_use_case
from stock_api.presentation.routes.router import DefaultRouter

router = APIRouter(route_class=DefaultRouter)


@router.get('',
            summary='Retorna insights de mercado',
            response_model=MarketInsights)
def get_insights(
    symbols: Optional[str] = Query(None, description='Símbolos separados por vírgula (padrão: AAPL,GOOGL,MSFT,AMZN)'),
    use_case: GenerateMarketInsightsUseCase = Depends(build_insights_use_case)
):
    """Sentimento por ação, sentimento agregado do mercado e até 4 destaques."""
    parsed = None
    if symbols:
        try:
            parsed = [normalize_symbol(s) for s in symbols.split(',') if s.strip()]
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        if len(parsed) > MAX_OVERVIEW_SYMBOLS:
            raise HTTPException(status_code=400, detail=f'At most {MAX_OVERVIEW_SYMBOLS} symbols are allowed')
    return use_case.execute(parsed)
