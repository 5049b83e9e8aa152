"""Data models for influxdb_canary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class MetricQueryConfig:
    """Declarative description of one canary metric query.

    ``tags`` are rendered in the mapping's iteration order, so a ``dict``
    keeps the order the caller inserted them in.
    """

    metric_name: Optional[str]
    fields: Optional[Sequence[str]] = None
    tags: Optional[Mapping[str, str]] = None
    group_by_fields: Optional[Sequence[str]] = None
    type: str = "influxdb"


@dataclass(frozen=True)
class CanaryScope:
    """Time window and optional ``name:value`` filter for a query."""

    start: Optional[datetime]
    end: Optional[datetime]
    scope: Optional[str] = None
