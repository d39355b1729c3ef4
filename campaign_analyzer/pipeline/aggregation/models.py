"""Typed model of the aggregate view.

The breakdown attached to each row is a tagged variant whose shape depends on
the active drill-down mode:

- :class:`NoBreakdown` for ``DrillDown.NONE``,
- :class:`FlatBreakdown` (value -> count) for single-column modes,
- :class:`CombinedBreakdown` (ICP value -> :class:`IcpBucket`) for
  ``DrillDown.COMBINED``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from campaign_analyzer.config import (
    AD_CAMPAIGN_COLUMN,
    AD_GROUP_COLUMN,
    DEPARTMENT_COLUMN,
    DRILL_DOWN_LABELS,
    ICP_COLUMN,
    JOB_TITLE_COLUMN,
    LIFECYCLE_COLUMN,
)


class Dimension(str, Enum):
    """Built-in primary grouping columns."""

    AD_GROUP = AD_GROUP_COLUMN
    AD_CAMPAIGN = AD_CAMPAIGN_COLUMN


class DrillDown(str, Enum):
    """Secondary breakdown modes."""

    NONE = "none"
    ICP = "icp"
    LIFECYCLE = "lifecycle"
    JOB_TITLE = "job_title"
    DEPARTMENT = "department"
    COMBINED = "combined"

    @property
    def column(self) -> str | None:
        """Source column for single-column modes, ``None`` otherwise."""
        return _DRILL_DOWN_COLUMNS.get(self)

    @property
    def label(self) -> str:
        return DRILL_DOWN_LABELS[self.value]


_DRILL_DOWN_COLUMNS: dict[DrillDown, str] = {
    DrillDown.ICP: ICP_COLUMN,
    DrillDown.LIFECYCLE: LIFECYCLE_COLUMN,
    DrillDown.JOB_TITLE: JOB_TITLE_COLUMN,
    DrillDown.DEPARTMENT: DEPARTMENT_COLUMN,
}

DEFAULT_DIMENSION: str = Dimension.AD_GROUP.value
DEFAULT_DRILL_DOWN: DrillDown = DrillDown.NONE


@dataclass(frozen=True)
class NoBreakdown:
    """Marker for rows without a secondary breakdown."""


@dataclass(frozen=True)
class FlatBreakdown:
    counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class IcpBucket:
    """Contacts of one ICP tier within a row, split by lifecycle stage."""

    count: int
    lifecycle_distribution: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CombinedBreakdown:
    buckets: dict[str, IcpBucket] = field(default_factory=dict)


Breakdown = Union[NoBreakdown, FlatBreakdown, CombinedBreakdown]


@dataclass(frozen=True)
class AggregateRow:
    """One primary-dimension group.

    Attributes
    ----------
    primary_value : str
        Non-empty value of the primary dimension.
    total : int
        Number of records in the group.
    breakdown : Breakdown
        Secondary counts for the active drill-down mode.
    """

    primary_value: str
    total: int
    breakdown: Breakdown = field(default_factory=NoBreakdown)

    def count_for(self, key: str) -> int:
        """Return the count under ``key`` (outer ICP count in combined mode)."""
        if isinstance(self.breakdown, FlatBreakdown):
            return self.breakdown.counts.get(key, 0)
        if isinstance(self.breakdown, CombinedBreakdown):
            bucket = self.breakdown.buckets.get(key)
            return bucket.count if bucket is not None else 0
        return 0

    def lifecycle_for(self, key: str) -> dict[str, int]:
        """Return the lifecycle distribution of an ICP bucket (combined mode only)."""
        if isinstance(self.breakdown, CombinedBreakdown):
            bucket = self.breakdown.buckets.get(key)
            if bucket is not None:
                return dict(bucket.lifecycle_distribution)
        return {}


@dataclass(frozen=True)
class AggregateTable:
    """Header labels and rows produced by one aggregation run."""

    dimension: str
    drill_down: DrillDown
    headers: list[str] = field(default_factory=list)
    rows: list[AggregateRow] = field(default_factory=list)

    @property
    def dynamic_headers(self) -> list[str]:
        """Breakdown column labels (everything after the two fixed columns)."""
        return self.headers[2:]

    def row_for(self, primary_value: str) -> AggregateRow | None:
        for row in self.rows:
            if row.primary_value == primary_value:
                return row
        return None
