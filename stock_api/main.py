from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stock_api.domain.errors import StockApiError
from stock_api.presentation.middlewares.error_handlers import (
    http_exception_handler,
    request_validation_error_handler,
    stock_api_error_handler,
    validation_error_handler,
)
from stock_api.presentation.middlewares.performance_middleware import PerformanceMiddleware
from stock_api.presentation.routes import analytics, health, insights, predictions, stock_data


app = FastAPI(
    title='Stock Dashboard API',
    version='1.0.0',
    description='Cotações, histórico, indicadores técnicos e predição do próximo pregão '
                '(Gemini com fallback heurístico) para o dashboard de ações.'
)

app.add_middleware(PerformanceMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
    expose_headers=['X-Data-Source', 'X-Response-Time', 'X-Request-ID'],
)

app.include_router(health.router, prefix='/api/v1/health', tags=['Health'])
app.include_router(stock_data.router, prefix='/api/v1/stock-data', tags=['Stocks'])
app.include_router(predictions.router, prefix='/api/v1/predictions', tags=['Predictions'])
app.include_router(insights.router, prefix='/api/v1/insights', tags=['Insights'])
app.include_router(analytics.router, prefix='/api/v1/analytics', tags=['Analytics'])

app.add_exception_handler(StockApiError, stock_api_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(ValidationError, validation_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)


@app.get('/')
def root():
    return {
        'message': 'Stock Dashboard API',
        'docs': '/docs',
        'endpoints': {
            'health': '/api/v1/health',
            'stock_data': '/api/v1/stock-data',
            'predict': '/api/v1/predictions/predict',
            'cached_prediction': '/api/v1/predictions/{symbol}/cached',
            'analyze': '/api/v1/predictions/analyze',
            'compare': '/api/v1/predictions/compare',
            'insights': '/api/v1/insights',
            'metrics': '/api/v1/analytics/metrics'
        }
    }
