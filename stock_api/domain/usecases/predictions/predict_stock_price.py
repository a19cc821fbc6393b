from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from stock_api.domain.errors import CacheError, StockApiError
from stock_api.domain.models.prediction import Prediction, PredictionEstimate
from stock_api.domain.models.stock import Quote
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.domain.repositories.predictor import PredictionContext, Predictor
from stock_api.domain.usecases.indicators import estimate_technicals
from stock_api.domain.usecases.stocks.get_quote import GetQuoteUseCase
from stock_api.utils.logger import logger


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class PredictStockPriceUseCase:
    """
    Use case for the next-day price prediction of a symbol.

    Today's cached prediction is reused when present. Otherwise the AI
    predictor is tried first (when configured) and any failure falls back
    to the heuristic predictor. The result is cached by (symbol, date);
    a cache failure never fails the request.
    """

    def __init__(
        self,
        repository: PredictionRepository,
        fallback_predictor: Predictor,
        ai_predictor: Optional[Predictor] = None,
        quote_use_case: Optional[GetQuoteUseCase] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.repository = repository
        self.fallback_predictor = fallback_predictor
        self.ai_predictor = ai_predictor
        self.quote_use_case = quote_use_case
        self.today = today

    def _read_cache(self, symbol: str, prediction_date: str) -> Optional[Prediction]:
        try:
            return self.repository.get(symbol, prediction_date)
        except CacheError as e:
            logger.warning(f'Failed to fetch cached prediction: {e.message}')
            return None

    def _write_cache(self, prediction: Prediction):
        try:
            self.repository.upsert(prediction)
        except CacheError as e:
            logger.warning(f'Failed to cache prediction: {e.message}')

    def _build_context(
        self, symbol: str, current_price: float, history: List[float],
        quote: Optional[Quote] = None, fetch_quote: bool = True,
    ) -> PredictionContext:
        context = PredictionContext(symbol=symbol, current_price=current_price, history=history)
        if self.ai_predictor is None:
            return context

        context.quote = quote
        if quote is None and fetch_quote and self.quote_use_case is not None:
            result = self.quote_use_case.execute(symbol)
            # Synthetic quotes would only mislead the model.
            if result.is_ok:
                context.quote = result.data
        context.technicals = estimate_technicals(history)
        return context

    def _estimate(self, context: PredictionContext) -> PredictionEstimate:
        if self.ai_predictor is not None:
            try:
                return self.ai_predictor.predict(context)
            except StockApiError as e:
                logger.warning(f'AI prediction failed for {context.symbol}, using fallback algorithm: {e.message}')
        return self.fallback_predictor.predict(context)

    def execute(
        self,
        symbol: str,
        current_price: float,
        historical_data: List[float],
        quote: Optional[Quote] = None,
        fetch_quote: bool = True,
    ) -> Prediction:
        """`quote`, when given, is used for the AI prompt; `fetch_quote=False` skips the provider lookup."""
        symbol = symbol.upper()
        prediction_date = self.today().isoformat()

        cached = self._read_cache(symbol, prediction_date)
        if cached is not None:
            logger.info(f'Predição em cache reutilizada: {symbol} {prediction_date}')
            return cached

        context = self._build_context(symbol, current_price, list(historical_data), quote, fetch_quote)
        estimate = self._estimate(context)

        prediction = Prediction(
            symbol=symbol,
            current_price=current_price,
            predicted_price=estimate.predicted_price,
            confidence=estimate.confidence,
            prediction_date=prediction_date,
            method=estimate.method,
            reasoning=estimate.reasoning,
        )
        self._write_cache(prediction)
        logger.info(f'Predição gerada: {symbol} via {estimate.method}')
        return prediction
