import pytest
from starlette.requests import Request

from cors_helper.config import get_settings

_CORS_ENV = (
    "CORS_ALLOWED_ORIGINS",
    "CORS_ALLOWED_METHODS",
    "CORS_ALLOWED_HEADERS",
    "CORS_ALLOW_CREDENTIALS",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from the built-in defaults, not the caller's shell."""
    for name in _CORS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_request(origin: str | None = None, method: str = "GET") -> Request:
    """Build a bare Starlette request, optionally carrying an Origin header."""
    headers = []
    if origin is not None:
        headers.append((b"origin", origin.encode("latin-1")))
    return Request(
        {
            "type": "http",
            "method": method,
            "path": "/",
            "query_string": b"",
            "headers": headers,
        }
    )
