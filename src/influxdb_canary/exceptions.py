"""Exceptions for influxdb_canary."""

class CanaryQueryError(ValueError):
    """Base exception for influxdb_canary."""


class InvalidConfigurationError(CanaryQueryError):
    """A mandatory query or scope value is missing or malformed."""


class InvalidScopeFormatError(CanaryQueryError):
    """Scope string is not a single 'name:value' pair."""
