from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stock_api.domain.errors import StockApiError
from stock_api.utils.logger import logger


def _error_list(exc) -> list:
    return [
        {
            'loc': list(err['loc']),
            'msg': err['msg'],
            'type': err['type']
        } for err in exc.errors()
    ]


async def stock_api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, StockApiError):
        logger.warning(f'{type(exc).__name__} on {request.url.path}: {exc.message}')
        return JSONResponse(status_code=exc.status_code, content={'error': exc.message})
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={'error': str(exc.detail)},
            headers=getattr(exc, 'headers', None),
        )
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(
            status_code=422,
            content={'error': 'Invalid data', 'errors': _error_list(exc)}
        )
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={'error': 'Invalid request', 'errors': _error_list(exc)}
        )
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})
