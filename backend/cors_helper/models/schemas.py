"""
CORS policy models.

Defines the HttpMethod literal, the OriginRule tagged variant
(NoOrigin, WildcardOrigin, ExactOrigin, AnyOfOrigins, PredicateOrigin)
and the CorsOptions policy model.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

HttpMethod = Literal["GET", "POST", "DELETE", "PATCH", "PUT", "OPTIONS"]

WILDCARD = "*"


# ── Origin rules ──────────────────────────────────────────────

class OriginRule:
    """Base class of the allowed-origin variants."""

    __slots__ = ()


@dataclass(frozen=True)
class NoOrigin(OriginRule):
    """No origin is allowed."""


@dataclass(frozen=True)
class WildcardOrigin(OriginRule):
    """Any origin is allowed; echoed back as ``*``."""


@dataclass(frozen=True)
class ExactOrigin(OriginRule):
    value: str


@dataclass(frozen=True)
class AnyOfOrigins(OriginRule):
    values: tuple[str, ...]


@dataclass(frozen=True)
class PredicateOrigin(OriginRule):
    check: Callable[[str], bool]


def coerce_origin(raw: Any) -> Any:
    """Map the loose configuration shapes onto an OriginRule.

    ``None`` or ``""`` → NoOrigin, ``"*"`` → WildcardOrigin, any other string
    → ExactOrigin, a list/tuple/set of strings → AnyOfOrigins, a callable →
    PredicateOrigin. Rules pass through untouched; anything else is returned
    as-is so pydantic can reject it.
    """
    if isinstance(raw, OriginRule):
        return raw
    if raw is None or raw == "":
        return NoOrigin()
    if raw == WILDCARD:
        return WildcardOrigin()
    if isinstance(raw, str):
        return ExactOrigin(raw)
    if isinstance(raw, (list, tuple, set, frozenset)) and all(isinstance(o, str) for o in raw):
        return AnyOfOrigins(tuple(raw))
    if callable(raw):
        return PredicateOrigin(raw)
    return raw


# ── Policy ────────────────────────────────────────────────────

class CorsOptions(BaseModel):
    """CORS policy: which origins, methods, headers and credentials are allowed."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    origin: OriginRule = Field(default_factory=NoOrigin)
    methods: list[HttpMethod] | None = None
    headers: list[str] | None = None
    credentials: bool = False

    @field_validator("origin", mode="before")
    @classmethod
    def _coerce_origin(cls, value: Any) -> Any:
        return coerce_origin(value)
