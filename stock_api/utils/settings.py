import os
from functools import lru_cache
from typing import Optional


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    return value.strip()


class Settings:
    """Runtime configuration read from environment variables (.env supported)."""

    def __init__(self):
        self.env = _env('ENV', 'PRODUCTION')
        self.log_dir = _env('LOG_DIR', 'logs')

        self.market_data_provider = _env('MARKET_DATA_PROVIDER', 'fmp').lower()
        self.fmp_api_key = _env('FINANCIAL_MODELING_PREP_API_KEY')
        self.fmp_base_url = _env('FMP_BASE_URL', 'https://financialmodelingprep.com/api/v3')

        self.gemini_api_key = _env('GEMINI_API_KEY')
        self.gemini_model = _env('GEMINI_MODEL', 'gemini-1.5-flash-latest')
        self.gemini_base_url = _env('GEMINI_BASE_URL', 'https://generativelanguage.googleapis.com/v1beta')

        self.database_url = _env('DATABASE_URL', 'sqlite:///stock_predictions.db')
        self.http_timeout = float(_env('HTTP_TIMEOUT_SECONDS', '10'))

    @property
    def is_local(self) -> bool:
        return self.env == 'LOCAL'

    @property
    def ai_enabled(self) -> bool:
        return self.gemini_api_key is not None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
