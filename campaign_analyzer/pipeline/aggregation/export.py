"""Export the aggregate table to a pandas DataFrame or a CSV file."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from campaign_analyzer.exceptions import ExportError

from .formatting import format_percentage
from .models import AggregateTable

logger = logging.getLogger(__name__)


def table_to_dataframe(table: AggregateTable) -> pd.DataFrame:
    """Flatten an aggregate table into one DataFrame row per primary value.

    Each dynamic header contributes a count column and a ``"<header> %"``
    column. In combined mode the counts are the outer ICP bucket counts.

    Parameters
    ----------
    table : AggregateTable
        Output of ``aggregate``.

    Returns
    -------
    pd.DataFrame
        Columns ``[dimension, "Total Contacts", h1, "h1 %", ...]``; empty
        (with no columns) when the table has no headers.
    """
    if not table.headers:
        return pd.DataFrame()
    columns = table.headers[:2]
    for header in table.dynamic_headers:
        columns.extend([header, f"{header} %"])

    data = []
    for row in table.rows:
        values: list[object] = [row.primary_value, row.total]
        for header in table.dynamic_headers:
            count = row.count_for(header)
            values.extend([count, float(format_percentage(count, row.total))])
        data.append(values)
    return pd.DataFrame(data, columns=columns)


def export_table_csv(table: AggregateTable, output_file: Path) -> Path:
    """Write ``table`` to ``output_file`` as CSV, creating parent directories.

    Raises
    ------
    ExportError
        If the file cannot be written.
    """
    output_file = Path(output_file)
    dataframe = table_to_dataframe(table)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        dataframe.to_csv(output_file, index=False)
    except OSError as err:
        raise ExportError(
            f"Could not write {output_file}", context={"reason": str(err)}
        ) from err
    logger.info("Exported %d rows to %s", len(dataframe), output_file)
    return output_file
