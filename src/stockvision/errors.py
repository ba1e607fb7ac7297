"""Custom exceptions for clearer error handling across the package."""


class StockVisionError(Exception):
    """Base exception for all package-specific errors."""


class ConfigError(StockVisionError):
    """Raised when environment configuration is invalid."""


class DataProviderError(StockVisionError):
    """Raised when market data retrieval fails."""


class UpstreamError(DataProviderError):
    """Raised when the provider answers with an explicit error payload."""


class MissingDataError(DataProviderError):
    """Raised when a well-formed payload lacks the expected data."""


class NetworkError(DataProviderError):
    """Raised when the HTTP transport fails or returns an unreadable body."""
