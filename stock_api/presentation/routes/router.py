from typing import Callable

from fastapi import Request, Response
from fastapi.routing import APIRoute

from stock_api.utils.logger import logger


class DefaultRouter(APIRoute):
    """Route class that logs the incoming body/query and the outgoing body."""

    def get_route_handler(self) -> Callable:  # noqa: C901
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            try:
                if await request.body():
                    try:
                        body = await request.json()
                        logger.info(f'Received Body: {body}')
                    except ValueError:
                        logger.warning(f'Received non-JSON body on {request.url.path}')
                query = request.query_params
                if query:
                    logger.info(f'Received Query: {query}')
                response: Response = await original_route_handler(request)
                logger.info(f'Response Body: {response.body[:500]!r}')
            except Exception as error:
                logger.error(f'Error on {request.url.path}: {error}')
                raise

            return response

        return custom_route_handler
