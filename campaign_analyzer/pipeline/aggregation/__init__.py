"""Aggregation engine, typed aggregate model, formatting and export helpers."""

from .engine import aggregate, dynamic_headers, group_records
from .export import export_table_csv, table_to_dataframe
from .formatting import format_cell, format_percentage
from .models import (
    DEFAULT_DIMENSION,
    DEFAULT_DRILL_DOWN,
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

__all__ = [
    "DEFAULT_DIMENSION",
    "DEFAULT_DRILL_DOWN",
    "AggregateRow",
    "AggregateTable",
    "Breakdown",
    "CombinedBreakdown",
    "Dimension",
    "DrillDown",
    "FlatBreakdown",
    "IcpBucket",
    "NoBreakdown",
    "aggregate",
    "dynamic_headers",
    "export_table_csv",
    "format_cell",
    "format_percentage",
    "group_records",
    "table_to_dataframe",
]
