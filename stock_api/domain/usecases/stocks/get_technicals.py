from stock_api.domain.errors import NotFoundError
from stock_api.domain.models.result import FetchResult
from stock_api.domain.models.stock import TechnicalSnapshot
from stock_api.domain.usecases.indicators import estimate_technicals
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase


class GetTechnicalsUseCase:
    """Use case for the technical snapshot of a symbol's recent closes."""

    def __init__(self, history_use_case: GetHistoryUseCase):
        self.history_use_case = history_use_case

    def execute(self, symbol: str) -> FetchResult[TechnicalSnapshot]:
        history = self.history_use_case.execute(symbol)
        snapshot = estimate_technicals([point.price for point in history.unwrap()])
        if snapshot is None:
            return FetchResult.err(NotFoundError(f'Technical data for {symbol} not found'))

        return FetchResult(history.status, data=snapshot, error=history.error)
