from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_HISTORY_DAYS = 30
MAX_OVERVIEW_SYMBOLS = 20


def normalize_symbol(symbol: str) -> str:
    """Symbols are case-insensitive; the canonical form is stripped upper-case."""
    normalized = (symbol or '').strip().upper()
    if not normalized:
        raise ValueError('Symbol must not be empty')
    if len(normalized) > 12:
        raise ValueError(f'Invalid symbol: {normalized}')
    return normalized


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Quote(CamelModel):
    """Cotação atual de uma ação."""
    symbol: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    volume: int
    market_cap: Optional[float] = None


class HistoricalPoint(CamelModel):
    """Fechamento diário; timestamp em epoch millis."""
    timestamp: int
    price: float
    volume: int


class TechnicalSnapshot(CamelModel):
    """Indicadores aproximados derivados dos fechamentos recentes."""
    rsi: float = Field(ge=0, le=100)
    trend: Literal['bullish', 'bearish']
    support: float
    resistance: float


class StockDataRequest(CamelModel):
    """Corpo da rota de dados: {action, symbol | symbols}."""
    action: str
    symbol: Optional[str] = None
    symbols: Optional[List[str]] = Field(default=None, max_length=MAX_OVERVIEW_SYMBOLS)

    @field_validator('symbol')
    @classmethod
    def _normalize_symbol(cls, value: Optional[str]) -> Optional[str]:
        return normalize_symbol(value) if value is not None else None

    @field_validator('symbols')
    @classmethod
    def _normalize_symbols(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return [normalize_symbol(s) for s in value]
