"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Self

from dotenv import load_dotenv

from stockvision.errors import ConfigError

DEMO_API_KEY = "demo"
DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_WATCHLIST = ["AAPL", "MSFT", "GOOGL", "AMZN", "META"]


def parse_optional_positive_int(value: str | None, *, field_name: str) -> int | None:
    """Parse optional positive integer values from env strings."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer") from exc
    if parsed <= 0:
        raise ConfigError(f"{field_name} must be positive")
    return parsed


def parse_float(value: str | None, default: float, *, field_name: str) -> float:
    """Parse a float env value, keeping the default for blanks."""
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be a number") from exc


def parse_symbols(value: str | None, default: list[str] | None = None) -> list[str]:
    """Parse comma-separated symbols."""
    fallback = default or DEFAULT_WATCHLIST
    if not value:
        return list(fallback)
    symbols = [item.strip().upper() for item in value.split(",") if item.strip()]
    return symbols or list(fallback)


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    api_key: str = DEMO_API_KEY
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 15.0
    cache_ttl_seconds: float = 300.0
    request_delay_seconds: float = 0.2
    outputsize: str = "full"
    watchlist: list[str] = field(default_factory=lambda: list(DEFAULT_WATCHLIST))
    refresh_interval_seconds: int = 300
    max_passes: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            api_key=str(os.getenv("ALPHA_VANTAGE_API_KEY", "")).strip() or DEMO_API_KEY,
            base_url=str(os.getenv("ALPHA_VANTAGE_BASE_URL", DEFAULT_BASE_URL)).strip(),
            request_timeout=parse_float(
                os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0, field_name="request_timeout"
            ),
            cache_ttl_seconds=parse_float(
                os.getenv("CACHE_TTL_SECONDS"), 300.0, field_name="cache_ttl_seconds"
            ),
            request_delay_seconds=parse_float(
                os.getenv("REQUEST_DELAY_SECONDS"), 0.2, field_name="request_delay_seconds"
            ),
            outputsize=str(os.getenv("TIME_SERIES_OUTPUTSIZE", "full")).strip().lower(),
            watchlist=parse_symbols(os.getenv("WATCHLIST")),
            refresh_interval_seconds=parse_optional_positive_int(
                os.getenv("REFRESH_INTERVAL_SECONDS"),
                field_name="refresh_interval_seconds",
            )
            or 300,
            max_passes=parse_optional_positive_int(
                os.getenv("MAX_PASSES"),
                field_name="max_passes",
            ),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def uses_demo_key(self) -> bool:
        """Return True when running on the rate-limited demo credential."""
        return self.api_key == DEMO_API_KEY

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.api_key.strip():
            raise ConfigError("api_key must not be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigError("base_url must be an http(s) URL")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        if self.cache_ttl_seconds <= 0:
            raise ConfigError("cache_ttl_seconds must be positive")
        if self.request_delay_seconds < 0:
            raise ConfigError("request_delay_seconds must not be negative")
        if self.outputsize not in {"compact", "full"}:
            raise ConfigError("outputsize must be one of compact, full")
        if not self.watchlist:
            raise ConfigError("watchlist must contain at least one symbol")
        if self.refresh_interval_seconds <= 0:
            raise ConfigError("refresh_interval_seconds must be positive")
        if self.max_passes is not None and self.max_passes <= 0:
            raise ConfigError("max_passes must be positive")
        return self
