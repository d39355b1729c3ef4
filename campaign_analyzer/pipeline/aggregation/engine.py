"""Grouping and drill-down aggregation of contact records.

``aggregate`` is a pure function of ``(records, dimension, drill_down)``: it
holds no cache and is re-run whenever any of its inputs change. Cost is linear
in the number of records.

Rules
-----
- Records whose primary-dimension value is empty (or missing) belong to no
  group; there is no catch-all bucket.
- Rows are emitted in first-seen order of the primary values.
- Dynamic header labels are the sorted distinct non-empty values of the
  drill-down column across *all* records, independent of which rows contain
  them. In combined mode only ICP values become headers; lifecycle values
  live inside each ICP bucket.
- Empty breakdown values are dropped from that level's counts.

Examples
--------
>>> records = [
...     {"Ad Group Name": "G1", "Department": "Sales"},
...     {"Ad Group Name": "G1", "Department": ""},
...     {"Ad Group Name": "", "Department": "IT"},
... ]
>>> table = aggregate(records, "Ad Group Name", DrillDown.DEPARTMENT)
>>> table.headers
['Ad Group Name', 'Total Contacts', 'IT', 'Sales']
>>> table.rows[0].total, table.rows[0].count_for("Sales")
(2, 1)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from campaign_analyzer.config import ICP_COLUMN, LIFECYCLE_COLUMN, TOTAL_CONTACTS_LABEL

from .models import (
    AggregateRow,
    AggregateTable,
    Breakdown,
    CombinedBreakdown,
    Dimension,
    DrillDown,
    FlatBreakdown,
    IcpBucket,
    NoBreakdown,
)

Record = Mapping[str, str]


def _value(record: Record, column: str) -> str:
    return record.get(column) or ""


def group_records(records: Iterable[Record], column: str) -> dict[str, list[Record]]:
    """Group records by ``column`` in first-seen order, skipping empty values."""
    groups: dict[str, list[Record]] = {}
    for record in records:
        key = _value(record, column)
        if not key:
            continue
        groups.setdefault(key, []).append(record)
    return groups


def count_values(records: Iterable[Record], column: str) -> dict[str, int]:
    """Count non-empty values of ``column`` in first-seen order."""
    return dict(Counter(v for v in (_value(r, column) for r in records) if v))


def distinct_sorted(records: Iterable[Record], column: str) -> list[str]:
    """Return sorted distinct non-empty values of ``column``."""
    return sorted({_value(record, column) for record in records} - {""})


def dynamic_headers(records: Sequence[Record], drill_down: DrillDown) -> list[str]:
    """Return the breakdown column labels for ``drill_down``."""
    if drill_down is DrillDown.NONE:
        return []
    if drill_down is DrillDown.COMBINED:
        return distinct_sorted(records, ICP_COLUMN)
    return distinct_sorted(records, drill_down.column)


def build_breakdown(contacts: Sequence[Record], drill_down: DrillDown) -> Breakdown:
    """Compute the breakdown of one primary group for ``drill_down``."""
    if drill_down is DrillDown.NONE:
        return NoBreakdown()
    if drill_down is DrillDown.COMBINED:
        buckets = {
            icp: IcpBucket(
                count=len(icp_contacts),
                lifecycle_distribution=count_values(icp_contacts, LIFECYCLE_COLUMN),
            )
            for icp, icp_contacts in group_records(contacts, ICP_COLUMN).items()
        }
        return CombinedBreakdown(buckets=buckets)
    return FlatBreakdown(counts=count_values(contacts, drill_down.column))


def aggregate(
    records: Sequence[Record],
    dimension: str,
    drill_down: DrillDown | str = DrillDown.NONE,
) -> AggregateTable:
    """Group ``records`` by ``dimension`` and break each group down.

    Parameters
    ----------
    records : Sequence[Mapping[str, str]]
        Validated contact records.
    dimension : str
        Column supplying the primary grouping key.
    drill_down : DrillDown | str, optional
        Breakdown mode; plain strings are coerced (``"combined"`` etc.).

    Returns
    -------
    AggregateTable
        Headers ``[dimension, "Total Contacts", *dynamic]`` and one
        ``AggregateRow`` per distinct non-empty primary value. An empty
        record set yields a table with no headers and no rows.

    Raises
    ------
    ValueError
        If ``drill_down`` is not a known mode.
    """
    mode = DrillDown(drill_down)
    if isinstance(dimension, Dimension):
        dimension = dimension.value
    if not records:
        return AggregateTable(dimension=dimension, drill_down=mode)

    rows = [
        AggregateRow(
            primary_value=primary_value,
            total=len(contacts),
            breakdown=build_breakdown(contacts, mode),
        )
        for primary_value, contacts in group_records(records, dimension).items()
    ]
    headers = [dimension, TOTAL_CONTACTS_LABEL, *dynamic_headers(records, mode)]
    return AggregateTable(dimension=dimension, drill_down=mode, headers=headers, rows=rows)
