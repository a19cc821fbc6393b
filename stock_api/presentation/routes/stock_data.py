from fastapi import APIRouter, Depends, HTTPException, Response

from stock_api.domain.models.stock import StockDataRequest
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_market_overview import GetMarketOverviewUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase
from stock_api.domain.usecases.stocks.get_technicals import GetTechnicalsUseCase
from stock_api.presentation.factories.usecase_factory import (
    build_history_use_case,
    build_overview_use_case,
    build_quote_use_case,
    build_technicals_use_case,
)
from stock_api.presentation.routes.router import DefaultRouter

router = APIRouter(route_class=DefaultRouter)


def _require_symbol(request: StockDataRequest) -> str:
    if not request.symbol:
        raise HTTPException(status_code=400, detail=f'Symbol is required for action {request.action}')
    return request.symbol


@router.post('', summary='Retorna cotação, histórico, overview ou indicadores técnicos')
def stock_data(
    request: StockDataRequest,
    response: Response,
    quote_use_case: GetQuoteUseCase = Depends(build_quote_use_case),
    history_use_case: GetHistoryUseCase = Depends(build_history_use_case),
    overview_use_case: GetMarketOverviewUseCase = Depends(build_overview_use_case),
    technicals_use_case: GetTechnicalsUseCase = Depends(build_technicals_use_case),
):
    """
    Despacha pela `action` do corpo:

    - `quote`: cotação atual de `symbol`
    - `historical`: até 30 fechamentos diários de `symbol`, do mais antigo ao mais recente
    - `overview`: cotações de `symbols`; símbolos com falha são omitidos
    - `technical`: RSI aproximado, tendência, suporte e resistência de `symbol`

    Para ações de um único símbolo, o header `X-Data-Source` indica se os dados
    vieram do provedor (`live`) ou do gerador sintético (`synthetic`).
    """
    if request.action == 'quote':
        result = quote_use_case.execute(_require_symbol(request))
    elif request.action == 'historical':
        result = history_use_case.execute(_require_symbol(request))
    elif request.action == 'technical':
        result = technicals_use_case.execute(_require_symbol(request))
    elif request.action == 'overview':
        if not request.symbols:
            raise HTTPException(status_code=400, detail='Symbols are required for action overview')
        return overview_use_case.execute(request.symbols)
    else:
        raise HTTPException(status_code=400, detail='Invalid action specified')

    data = result.unwrap()
    response.headers['X-Data-Source'] = result.source
    return data
