"""influxdb_canary package."""

from .config import resolve_query_config, resolve_scope
from .exceptions import (
    CanaryQueryError,
    InvalidConfigurationError,
    InvalidScopeFormatError,
)
from .models import CanaryScope, MetricQueryConfig
from .query_builder import build_canary_query

__all__ = [
    "build_canary_query",
    "resolve_query_config",
    "resolve_scope",
    "CanaryQueryError",
    "InvalidConfigurationError",
    "InvalidScopeFormatError",
    "CanaryScope",
    "MetricQueryConfig",
]
