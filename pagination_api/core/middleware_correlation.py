from typing_extensions import override
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable
from collections.abc import Awaitable

from pagination_api.core.logging import get_logger


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Reads X-Request-ID (or generates one).
    - Sets `request.state.correlation_id`
    - Echoes the id on the response
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name: str = header_name

    @override
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        corr_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        request.state.correlation_id = corr_id

        response = await call_next(request)
        response.headers[self.header_name] = corr_id

        logger = get_logger(__name__, request)
        logger.debug(
            "%s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response
