from abc import ABC, abstractmethod
from typing import Optional

from stock_api.domain.models.prediction import Prediction


class PredictionRepository(ABC):
    """Interface for the per-(symbol, date) prediction cache."""

    @abstractmethod
    def get(self, symbol: str, prediction_date: str) -> Optional[Prediction]:
        """Get the stored prediction for the key, if any."""
        pass

    @abstractmethod
    def upsert(self, prediction: Prediction) -> None:
        """Insert the prediction or replace the one stored for the same key."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check that the backing store is reachable."""
        pass
