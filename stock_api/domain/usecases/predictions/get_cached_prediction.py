from datetime import date
from typing import Callable

from stock_api.domain.errors import CacheError, NotFoundError
from stock_api.domain.models.prediction import Prediction
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.domain.usecases.predictions.predict_stock_price import utc_today
from stock_api.utils.logger import logger


class GetCachedPredictionUseCase:
    """Use case for reading today's cached prediction of a symbol."""

    def __init__(self, repository: PredictionRepository, today: Callable[[], date] = utc_today):
        self.repository = repository
        self.today = today

    def execute(self, symbol: str) -> Prediction:
        prediction_date = self.today().isoformat()
        try:
            cached = self.repository.get(symbol, prediction_date)
        except CacheError as e:
            logger.warning(f'Failed to fetch cached prediction: {e.message}')
            cached = None

        if cached is None:
            raise NotFoundError(f'No cached prediction for {symbol} on {prediction_date}')
        return cached
