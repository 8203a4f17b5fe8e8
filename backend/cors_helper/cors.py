"""
CORS policy evaluation and header injection.

resolve_allowed_origin() decides which origin to echo back for a request,
add_cors_headers() decorates an outgoing response with the Access-Control-*
headers, handle_cors_preflight() answers OPTIONS probes and
default_cors_options() returns the permissive default policy.
"""

from __future__ import annotations

import copy

from starlette.requests import Request
from starlette.responses import Response

from cors_helper.models.schemas import (
    WILDCARD,
    AnyOfOrigins,
    CorsOptions,
    ExactOrigin,
    NoOrigin,
    PredicateOrigin,
    WildcardOrigin,
)
from cors_helper.utils.logger import get_logger

logger = get_logger(__name__)

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"


def resolve_allowed_origin(request_origin: str, policy: CorsOptions) -> str:
    """Return the value for Access-Control-Allow-Origin, or "" to deny."""
    match policy.origin:
        case NoOrigin():
            return ""
        case WildcardOrigin():
            return WILDCARD
        case ExactOrigin(value):
            return request_origin if request_origin == value else ""
        case AnyOfOrigins(values):
            return request_origin if request_origin in values else ""
        case PredicateOrigin(check):
            try:
                allowed = bool(check(request_origin))
            except Exception as exc:
                logger.warning("Origin predicate failed for %r: %s", request_origin, exc)
                return ""
            return request_origin if allowed else ""
        case _:
            return ""


async def _read_body(response: Response) -> bytes:
    # StreamingResponse, and the responses handed back by call_next() in
    # BaseHTTPMiddleware, only expose a body iterator
    body_iterator = getattr(response, "body_iterator", None)
    if body_iterator is None:
        return response.body
    chunks = []
    async for chunk in body_iterator:
        chunks.append(chunk.encode(response.charset) if isinstance(chunk, str) else bytes(chunk))
    return b"".join(chunks)


async def add_cors_headers(
    response: Response,
    request: Request,
    policy: CorsOptions | None,
) -> Response:
    """Return a copy of *response* carrying the CORS headers for *request*.

    Requests without an ``origin`` header, and calls without a policy, get
    the original response back untouched. Otherwise the status code, body
    and existing headers are kept and the Access-Control-Allow-* headers are
    merged in. A denied origin still sets Access-Control-Allow-Origin, with
    an empty value.
    """
    origin = request.headers.get("origin")
    if not origin or policy is None:
        return response

    allowed_origin = resolve_allowed_origin(origin, policy)
    logger.debug("CORS origin=%s allowed=%r", origin, allowed_origin)

    streamed = hasattr(response, "body_iterator")
    if streamed or hasattr(response, "body"):
        body = await _read_body(response)
        decorated = Response(
            content=body,
            status_code=response.status_code,
            background=getattr(response, "background", None),
        )
    else:
        # FileResponse sends its body from disk when called
        body = b""
        decorated = copy.copy(response)
        vars(decorated).pop("_headers", None)

    # Copy raw pairs so repeated headers such as set-cookie survive
    decorated.raw_headers = list(response.raw_headers)
    headers = decorated.headers
    if streamed and body and "content-length" not in headers:
        headers["content-length"] = str(len(body))

    headers[ALLOW_ORIGIN] = allowed_origin
    if policy.methods:
        headers[ALLOW_METHODS] = ", ".join(policy.methods)
    if policy.headers:
        headers[ALLOW_HEADERS] = ", ".join(policy.headers)
    if policy.credentials:
        headers[ALLOW_CREDENTIALS] = "true"

    return decorated


def handle_cors_preflight(policy: CorsOptions | None) -> Response:
    """Return the bare 204 reply to a preflight request.

    The Access-Control-* headers are attached by passing the result through
    add_cors_headers(). *policy* is not consulted yet.
    """
    return Response(status_code=204)


def default_cors_options() -> CorsOptions:
    """Return a new permissive policy: any origin, common methods and headers."""
    return CorsOptions(
        origin=WildcardOrigin(),
        methods=["GET", "POST", "PATCH", "DELETE"],
        credentials=False,
        headers=["Content-Type", "Authorization"],
    )
