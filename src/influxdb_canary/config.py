"""Resolving canary query inputs from plain mappings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from .exceptions import InvalidConfigurationError
from .models import CanaryScope, MetricQueryConfig

METRIC_SOURCE_TYPE = "influxdb"


def _dict_get(d: Mapping[str, Any], key: str, fallback: Any = None) -> Any:
    if key in d:
        return d[key]
    return fallback


def resolve_query_config(config: MetricQueryConfig | Mapping[str, Any]) -> MetricQueryConfig:
    """Build a `MetricQueryConfig` from a canary metric query mapping.

    Accepts the camelCase keys used in canary configurations
    (``metricName``, ``groupByFields``) as well as snake_case names.
    """
    if isinstance(config, MetricQueryConfig):
        return config
    source_type = _dict_get(config, "type", METRIC_SOURCE_TYPE)
    if source_type != METRIC_SOURCE_TYPE:
        raise InvalidConfigurationError(
            f"Unsupported metric source type '{source_type}', expected '{METRIC_SOURCE_TYPE}'"
        )
    tags = _dict_get(config, "tags")
    return MetricQueryConfig(
        metric_name=_dict_get(config, "metricName", _dict_get(config, "metric_name")),
        fields=_as_list(_dict_get(config, "fields")),
        tags=dict(tags) if tags is not None else None,
        group_by_fields=_as_list(
            _dict_get(config, "groupByFields", _dict_get(config, "group_by_fields"))
        ),
        type=source_type,
    )


def resolve_scope(scope: CanaryScope | Mapping[str, Any]) -> CanaryScope:
    """Build a `CanaryScope` from a mapping.

    ``start`` and ``end`` may be datetimes, ISO-8601 strings or epoch
    seconds. Missing instants stay ``None``; the query builder rejects them.
    """
    if isinstance(scope, CanaryScope):
        return scope
    return CanaryScope(
        start=_parse_instant(_dict_get(scope, "start"), "start"),
        end=_parse_instant(_dict_get(scope, "end"), "end"),
        scope=_dict_get(scope, "scope"),
    )


def _as_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return list(value)


def _parse_instant(value: Any, name: str) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        raise InvalidConfigurationError(f"Invalid {name} time: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidConfigurationError(f"Invalid {name} time: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidConfigurationError(f"Invalid {name} time: {value!r}") from exc
    raise InvalidConfigurationError(f"Invalid {name} time: {value!r}")
