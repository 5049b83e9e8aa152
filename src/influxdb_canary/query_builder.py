"""InfluxQL query builder for canary metric queries."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Mapping, Optional, Sequence, Tuple
import logging

from .exceptions import InvalidConfigurationError, InvalidScopeFormatError
from .models import CanaryScope, MetricQueryConfig

logger = logging.getLogger(__name__)

ALL_FIELDS = "*::field"
SCOPE_INVALID_FORMAT_MSG = (
    "Scope expected in the format of 'name:value'. "
    "e.g. autoscaling_group:myapp-prod-v002, received: "
)


def build_canary_query(query_config: MetricQueryConfig, scope: Optional[CanaryScope]) -> str:
    """Build the InfluxQL query for ``query_config`` over ``scope``.

    Clauses are emitted in a fixed order: SELECT, FROM, the time range,
    the scope filter, tag filters and GROUP BY. Optional clauses are left
    out entirely when their input is empty. Scope and tag values are
    interpolated into single quotes as-is, without escaping.

    Raises:
        InvalidConfigurationError: measurement, scope or start/end missing.
        InvalidScopeFormatError: ``scope.scope`` is not ``name:value``.
    """
    _validate_mandatory_params(query_config, scope)

    parts = [
        _select_clause(query_config.fields),
        _from_clause(query_config.metric_name),
        _time_range_filter(scope.start, scope.end),
    ]
    if scope.scope is not None:
        parts.append(_scope_filter(scope.scope))
    if query_config.tags:
        parts.append(_tags_filter(query_config.tags))
    if query_config.group_by_fields:
        parts.append(_group_by_clause(query_config.group_by_fields))
    query = "".join(parts)

    logger.debug("Built query: %s config: %s scope: %s", query, query_config, scope)
    return query


def _validate_mandatory_params(
    query_config: MetricQueryConfig, scope: Optional[CanaryScope]
) -> None:
    if not query_config.metric_name:
        raise InvalidConfigurationError("Measurement is required to query metrics")
    if scope is None:
        raise InvalidConfigurationError("Canary scope is missing")
    if scope.start is None or scope.end is None:
        raise InvalidConfigurationError("Start and end times are required")


def _select_clause(fields: Optional[Sequence[str]]) -> str:
    field_list = _names(fields) or [ALL_FIELDS]
    return "SELECT " + ", ".join(field_list)


def _from_clause(measurement: str) -> str:
    return f" FROM {measurement}"


def _time_range_filter(start: datetime, end: datetime) -> str:
    return f" WHERE time >= '{fmt_time(start)}' AND time < '{fmt_time(end)}'"


def _scope_filter(scope: str) -> str:
    key, value = split_scope(scope)
    return f" AND {key}='{value}'"


def _tags_filter(tags: Mapping[str, str]) -> str:
    return " AND " + " AND ".join([f"{k}='{v}'" for k, v in tags.items()])


def _group_by_clause(group_by_fields: Sequence[str]) -> str:
    return " GROUP BY " + ", ".join(_names(group_by_fields))


def _names(values: Optional[Sequence[str] | str]) -> List[str]:
    # A bare string is one name, not a sequence of characters.
    if not values:
        return []
    if isinstance(values, str):
        return [values]
    return list(values)


def split_scope(scope: str) -> Tuple[str, str]:
    """Split a ``name:value`` scope into its two parts."""
    if ":" not in scope:
        raise InvalidScopeFormatError(SCOPE_INVALID_FORMAT_MSG + scope)
    parts = scope.split(":")
    if len(parts) != 2 or not all(parts):
        raise InvalidScopeFormatError(SCOPE_INVALID_FORMAT_MSG + scope)
    return parts[0], parts[1]


def fmt_time(value: datetime) -> str:
    """Render an instant as RFC 3339 UTC text, e.g. ``2010-01-01T12:00:00Z``.

    Naive values are taken to be UTC. The fraction is omitted for whole
    seconds and otherwise shown at millisecond or microsecond precision.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    text = value.isoformat(timespec="seconds")
    micros = value.microsecond
    if micros:
        if micros % 1000 == 0:
            text += f".{micros // 1000:03d}"
        else:
            text += f".{micros:06d}"
    return text + "Z"
