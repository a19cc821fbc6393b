from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.domain.repositories.prediction_repository import PredictionRepository
from stock_api.utils.settings import Settings


class GetHealthStatusUseCase:
    """Use case for checking application health status."""

    def __init__(self, repository: PredictionRepository, provider: MarketDataProvider, settings: Settings):
        self.repository = repository
        self.provider = provider
        self.settings = settings

    def execute(self):
        """Report cache connectivity and which data/prediction sources are active."""
        database_ok = self.repository.ping()
        return {
            'status': 'healthy' if database_ok else 'unhealthy',
            'message': 'API funcionando corretamente' if database_ok else 'Cache de predições indisponível',
            'data': {
                'database': database_ok,
                'market_data_provider': self.provider.name,
                'prediction_method': 'ai' if self.settings.ai_enabled else 'heuristic',
            }
        }
