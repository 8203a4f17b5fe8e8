"""
CORS middleware.

Answers preflight requests with handle_cors_preflight() and decorates every
other response with add_cors_headers(). The policy defaults to the one read
from settings.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cors_helper.config import get_settings
from cors_helper.cors import add_cors_headers, handle_cors_preflight
from cors_helper.models.schemas import CorsOptions
from cors_helper.utils.logger import get_logger

logger = get_logger(__name__)


def is_preflight(request: Request) -> bool:
    """True for an OPTIONS request carrying Origin and Access-Control-Request-Method."""
    return (
        request.method == "OPTIONS"
        and "origin" in request.headers
        and "access-control-request-method" in request.headers
    )


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Attach Access-Control-Allow-* headers according to *options*."""

    def __init__(self, app: ASGIApp, options: CorsOptions | None = None) -> None:
        super().__init__(app)
        self.options = options if options is not None else get_settings().cors_options()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if is_preflight(request):
            logger.debug(
                "Preflight %s  origin=%s  method=%s",
                request.url.path,
                request.headers["origin"],
                request.headers["access-control-request-method"],
            )
            response = handle_cors_preflight(self.options)
        else:
            response = await call_next(request)

        return await add_cors_headers(response, request, self.options)


def setup_cors(app: FastAPI, options: CorsOptions | None = None) -> None:
    """Attach the CORS middleware to the FastAPI application."""
    app.add_middleware(CorsHeadersMiddleware, options=options)
