"""
Configuration loader.

Uses pydantic-settings to read the CORS policy from environment variables
(or a .env file) and exposes it as a typed Settings object. Provides a cached
get_settings() accessor.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from cors_helper.models.schemas import CorsOptions


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── CORS ──────────────────────────────────────────────────
    CORS_ALLOWED_ORIGINS: str = "*"
    CORS_ALLOWED_METHODS: str = "GET,POST,PATCH,DELETE"
    CORS_ALLOWED_HEADERS: str = "Content-Type,Authorization"
    CORS_ALLOW_CREDENTIALS: bool = False

    # ── Environment ───────────────────────────────────────────
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Return CORS_ALLOWED_ORIGINS as a list split on commas."""
        return _split_csv(self.CORS_ALLOWED_ORIGINS)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def cors_options(self) -> CorsOptions:
        """Build the CORS policy described by these settings.

        A single ``*`` entry allows any origin, a single entry is matched
        exactly, several entries are matched by membership and an empty
        value allows none. Unknown method names raise ValidationError.
        """
        origins = self.allowed_origins_list
        if not origins:
            origin = None
        elif len(origins) == 1:
            origin = origins[0]
        else:
            origin = origins

        return CorsOptions(
            origin=origin,
            methods=[m.upper() for m in _split_csv(self.CORS_ALLOWED_METHODS)],
            headers=_split_csv(self.CORS_ALLOWED_HEADERS),
            credentials=self.CORS_ALLOW_CREDENTIALS,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
