from typing import Optional

from fastapi import Depends

from stock_api.domain.repositories.predictor import Predictor
from stock_api.domain.usecases.predictions.heuristic_predictor import HeuristicPredictor
from stock_api.infra.clients.gemini_client import GeminiClient
from stock_api.infra.clients.gemini_predictor import GeminiPredictor
from stock_api.utils.settings import Settings, get_settings


def build_fallback_predictor() -> Predictor:
    """Factory for the deterministic heuristic predictor."""
    return HeuristicPredictor()


def build_ai_predictor(settings: Settings = Depends(get_settings)) -> Optional[Predictor]:
    """Factory for the Gemini predictor; None when GEMINI_API_KEY is not set."""
    if not settings.ai_enabled:
        return None

    client = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.http_timeout,
    )
    return GeminiPredictor(client)
