from stock_api.domain.models.prediction import StockAnalysis
from stock_api.domain.usecases.predictions.predict_stock_price import PredictStockPriceUseCase
from stock_api.domain.usecases.stocks.get_history import GetHistoryUseCase
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase


class AnalyzeStockUseCase:
    """Use case running quote, history and prediction for one symbol."""

    def __init__(
        self,
        quote_use_case: GetQuoteUseCase,
        history_use_case: GetHistoryUseCase,
        predict_use_case: PredictStockPriceUseCase,
    ):
        self.quote_use_case = quote_use_case
        self.history_use_case = history_use_case
        self.predict_use_case = predict_use_case

    def execute(self, symbol: str) -> StockAnalysis:
        quote_result = self.quote_use_case.execute(symbol)
        history_result = self.history_use_case.execute(symbol)

        quote = quote_result.unwrap()
        history = history_result.unwrap()

        prediction = self.predict_use_case.execute(
            symbol=symbol,
            current_price=quote.price,
            historical_data=[point.price for point in history],
            quote=quote if quote_result.is_ok else None,
            fetch_quote=False,
        )

        return StockAnalysis(
            symbol=symbol,
            quote=quote,
            history=history,
            prediction=prediction,
            degraded=quote_result.is_degraded or history_result.is_degraded,
        )
