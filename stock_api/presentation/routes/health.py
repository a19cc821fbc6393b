from fastapi import APIRouter, Depends

from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.domain.usecases.health.get_health_status import GetHealthStatusUseCase
from stock_api.presentation.factories.provider_factory import build_market_data_provider
from stock_api.presentation.factories.repository_factory import build_prediction_repository
from stock_api.presentation.routes.router import DefaultRouter
from stock_api.utils.settings import Settings, get_settings

router = APIRouter(route_class=DefaultRouter)


@router.get('/', summary='Verifica o status da API e do cache de predições')
def health_check(
    repository: PredictionRepository = Depends(build_prediction_repository),
    provider: MarketDataProvider = Depends(build_market_data_provider),
    settings: Settings = Depends(get_settings),
):
    """Verifica o status de saúde da aplicação."""
    use_case = GetHealthStatusUseCase(repository, provider, settings)
    return use_case.execute()
