from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from stock_api.domain.models.prediction import PredictionEstimate
from stock_api.domain.models.stock import Quote, TechnicalSnapshot


@dataclass
class PredictionContext:
    """Inputs available to a prediction strategy."""
    symbol: str
    current_price: float
    history: List[float] = field(default_factory=list)
    quote: Optional[Quote] = None
    technicals: Optional[TechnicalSnapshot] = None


class Predictor(ABC):
    """Interface for next-day price prediction strategies."""

    method: str

    @abstractmethod
    def predict(self, context: PredictionContext) -> PredictionEstimate:
        """Predict the next trading day's price."""
        pass
