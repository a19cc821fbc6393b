from fastapi import Depends

from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.infra.db.database import build_session_factory, get_engine
from stock_api.infra.repositories.prediction_repository_impl import PredictionRepositoryImpl
from stock_api.utils.settings import Settings, get_settings


def build_prediction_repository(settings: Settings = Depends(get_settings)) -> PredictionRepository:
    """Factory function to create a PredictionRepository instance."""
    engine = get_engine(settings.database_url)
    return PredictionRepositoryImpl(build_session_factory(engine))
