"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Literal

from engine.constants import DEFAULT_BET, DECK_SHUFFLE_THRESHOLD, MIN_BET, STARTING_CHIPS


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _split_wager_mode() -> Literal["immediate", "deferred"]:
    mode = os.getenv("SPLIT_WAGER_MODE", "immediate").lower()
    if mode not in ("immediate", "deferred"):
        raise ValueError(f"SPLIT_WAGER_MODE must be 'immediate' or 'deferred', got {mode!r}")
    return mode  # type: ignore[return-value]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    starting_chips: int = field(
        default_factory=lambda: int(os.getenv("STARTING_CHIPS", str(STARTING_CHIPS)))
    )
    min_bet: int = field(default_factory=lambda: int(os.getenv("MIN_BET", str(MIN_BET))))
    default_bet: int = field(
        default_factory=lambda: int(os.getenv("DEFAULT_BET", str(DEFAULT_BET)))
    )
    reshuffle_threshold: float = field(
        default_factory=lambda: float(
            os.getenv("DECK_SHUFFLE_THRESHOLD", str(DECK_SHUFFLE_THRESHOLD))
        )
    )
    split_wager_mode: Literal["immediate", "deferred"] = field(default_factory=_split_wager_mode)
    strict_actions: bool = field(default_factory=lambda: _env_flag("STRICT_ACTIONS", "false"))


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
