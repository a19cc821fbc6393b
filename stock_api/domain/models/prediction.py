from typing import List, Literal, Optional

from pydantic import Field, PositiveFloat, field_validator

from stock_api.domain.models.stock import CamelModel, HistoricalPoint, Quote, normalize_symbol

MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 95
MAX_COMPARE_SYMBOLS = 5


class PredictionRequest(CamelModel):
    """Parâmetros para predição do próximo fechamento."""
    symbol: str
    current_price: PositiveFloat
    historical_data: List[PositiveFloat] = Field(
        default_factory=list,
        description='Fechamentos históricos, do mais antigo ao mais recente'
    )

    @field_validator('symbol')
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return normalize_symbol(value)


class PredictionEstimate(CamelModel):
    """Saída de uma estratégia de predição, antes de ser persistida."""
    predicted_price: float
    confidence: int = Field(ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    method: Literal['ai', 'heuristic']
    reasoning: Optional[str] = None


class Prediction(CamelModel):
    """Predição armazenada por (symbol, prediction_date)."""
    symbol: str
    current_price: float
    predicted_price: float
    confidence: int = Field(ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    prediction_date: str = Field(description='Data no formato YYYY-MM-DD')
    method: Literal['ai', 'heuristic'] = 'heuristic'
    reasoning: Optional[str] = None


class AnalyzeRequest(CamelModel):
    """Análise completa de um símbolo: cotação, histórico e predição."""
    symbol: str

    @field_validator('symbol')
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return normalize_symbol(value)


class StockAnalysis(CamelModel):
    """Resultado da análise; degraded indica dados sintéticos."""
    symbol: str
    quote: Quote
    history: List[HistoricalPoint]
    prediction: Prediction
    degraded: bool


class ProjectedPrice(CamelModel):
    """Um preço projetado para uma data futura."""
    date: str
    predicted_price: float


class CompareRequest(CamelModel):
    """Comparação de até 5 ações com projeção de N dias."""
    symbols: List[str] = Field(min_length=1, max_length=MAX_COMPARE_SYMBOLS)
    days: int = Field(default=5, ge=1, le=10, description='Dias de projeção (1-10)')

    @field_validator('symbols')
    @classmethod
    def _unique_symbols(cls, value: List[str]) -> List[str]:
        normalized = [normalize_symbol(s) for s in value]
        if len(set(normalized)) != len(normalized):
            raise ValueError('Stock already added')
        return normalized


class StockComparison(CamelModel):
    """Dados de uma ação na comparação."""
    symbol: str
    quote: Quote
    history: List[HistoricalPoint]
    projections: List[ProjectedPrice]
    degraded: bool
