from fastapi import Depends

from stock_api.domain.errors import ConfigError
from stock_api.domain.repositories.market_data_provider import MarketDataProvider
from stock_api.infra.providers.fmp_provider import FmpProvider
from stock_api.infra.providers.synthetic_provider import SyntheticProvider
from stock_api.infra.providers.yfinance_provider import YFinanceProvider
from stock_api.utils.logger import logger
from stock_api.utils.settings import Settings, get_settings


def build_fallback_provider() -> MarketDataProvider:
    """Factory for the synthetic provider used when live data is unavailable."""
    return SyntheticProvider()


def build_market_data_provider(settings: Settings = Depends(get_settings)) -> MarketDataProvider:
    """Factory for the live provider selected by MARKET_DATA_PROVIDER."""
    choice = settings.market_data_provider

    if choice == 'synthetic':
        return SyntheticProvider()
    if choice == 'yfinance':
        return YFinanceProvider()
    if choice != 'fmp':
        raise ConfigError(f'Unknown MARKET_DATA_PROVIDER: {choice}')

    try:
        return FmpProvider(
            api_key=settings.fmp_api_key,
            base_url=settings.fmp_base_url,
            timeout=settings.http_timeout,
        )
    except ConfigError as e:
        logger.warning(f'{e.message}; using synthetic market data')
        return SyntheticProvider()
