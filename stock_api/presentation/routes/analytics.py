from fastapi import APIRouter

from stock_api.domain.usecases.analytics_service import AnalyticsService
from stock_api.presentation.routes.router import DefaultRouter

router = APIRouter(route_class=DefaultRouter)

analytics_service = AnalyticsService()


@router.get('/metrics', summary='Retorna métricas gerais da API')
def get_metrics():
    """
    Retorna métricas agregadas: total de requests, tempo médio de resposta,
    taxa de erros, requests por endpoint/status, atividade recente.
    """
    return analytics_service.get_metrics()
