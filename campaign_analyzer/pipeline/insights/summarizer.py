"""Serialize an aggregate table into the AI insight prompt.

No network access happens here; the output of :func:`build_payload` is what
:class:`~campaign_analyzer.pipeline.insights.client.InsightAPIClient` sends.

Examples
--------
>>> from campaign_analyzer.pipeline.aggregation import AggregateRow, AggregateTable, DrillDown, FlatBreakdown
>>> table = AggregateTable(
...     dimension="Ad Group Name",
...     drill_down=DrillDown.DEPARTMENT,
...     headers=["Ad Group Name", "Total Contacts", "IT", "Sales"],
...     rows=[AggregateRow("G1", 4, FlatBreakdown({"Sales": 3}))],
... )
>>> summarize(table)
'G1 (Total: 4): IT: 0 (0%), Sales: 3 (75.0%)'
"""

from __future__ import annotations

from typing import Any

from campaign_analyzer.config import INSIGHT_PROMPT_TEMPLATE, NO_BREAKDOWN_TEXT
from campaign_analyzer.pipeline.aggregation.formatting import format_percentage
from campaign_analyzer.pipeline.aggregation.models import AggregateRow, AggregateTable


def _summarize_row(row: AggregateRow, columns: list[str]) -> str:
    parts = []
    for column in columns:
        count = row.count_for(column)
        percentage = format_percentage(count, row.total) if count else "0"
        parts.append(f"{column}: {count} ({percentage}%)")
    breakdown = ", ".join(parts) or NO_BREAKDOWN_TEXT
    return f"{row.primary_value} (Total: {row.total}): {breakdown}"


def summarize(table: AggregateTable) -> str:
    """Return one line per aggregate row, joined by newlines."""
    columns = table.dynamic_headers
    return "\n".join(_summarize_row(row, columns) for row in table.rows)


def build_prompt(table: AggregateTable) -> str:
    """Embed the table summary in the fixed analyst instruction template."""
    return INSIGHT_PROMPT_TEMPLATE.format(
        dimension=table.dimension,
        drill_down=table.drill_down.value,
        data_summary=summarize(table),
    )


def build_payload(prompt: str) -> dict[str, Any]:
    """Wrap ``prompt`` in the ``generateContent`` request body."""
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
