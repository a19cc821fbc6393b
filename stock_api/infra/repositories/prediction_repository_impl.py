from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stock_api.domain.errors import CacheError
from stock_api.domain.models.prediction import Prediction
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.infra.db.models import StockPredictionRow


class PredictionRepositoryImpl(PredictionRepository):
    """SQLAlchemy-backed prediction cache."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _to_model(row: StockPredictionRow) -> Prediction:
        return Prediction(
            symbol=row.symbol,
            current_price=float(row.current_price),
            predicted_price=float(row.predicted_price),
            confidence=int(row.confidence),
            prediction_date=row.prediction_date,
            method=row.method,
            reasoning=row.reasoning,
        )

    def get(self, symbol: str, prediction_date: str) -> Optional[Prediction]:
        try:
            with self.session_factory() as session:
                row = session.get(StockPredictionRow, (symbol.upper(), prediction_date))
                return self._to_model(row) if row is not None else None
        except SQLAlchemyError as e:
            raise CacheError(f'Failed to read cached prediction for {symbol}: {e}') from e

    def upsert(self, prediction: Prediction) -> None:
        row = StockPredictionRow(
            symbol=prediction.symbol.upper(),
            prediction_date=prediction.prediction_date,
            current_price=prediction.current_price,
            predicted_price=prediction.predicted_price,
            confidence=prediction.confidence,
            method=prediction.method,
            reasoning=prediction.reasoning,
        )
        try:
            with self.session_factory() as session:
                # merge() looks the row up by its composite primary key and replaces it.
                session.merge(row)
                session.commit()
        except SQLAlchemyError as e:
            raise CacheError(f'Failed to cache prediction for {prediction.symbol}: {e}') from e

    def ping(self) -> bool:
        try:
            with self.session_factory() as session:
                session.execute(text('SELECT 1'))
            return True
        except SQLAlchemyError:
            return False
