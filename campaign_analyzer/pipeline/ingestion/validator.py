"""Required-column contract checks for parsed contact records.

The validator only inspects the first record: every record produced by
:func:`campaign_analyzer.pipeline.ingestion.csv_parser.parse_csv` shares the
header's key set.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from campaign_analyzer.config import REQUIRED_COLUMNS
from campaign_analyzer.exceptions import EmptyOrInvalidFileError, MissingColumnsError


def find_missing_columns(
    records: Sequence[Mapping[str, str]],
    required: Sequence[str] = REQUIRED_COLUMNS,
) -> list[str]:
    """Return required columns absent from the first record, in required order.

    Examples
    --------
    >>> find_missing_columns([{"A": "1"}], required=("A", "B"))
    ['B']
    """
    if not records:
        return list(required)
    first = records[0]
    return [column for column in required if column not in first]


def validate_records(
    records: Sequence[Mapping[str, str]],
    required: Sequence[str] = REQUIRED_COLUMNS,
) -> None:
    """Check a parsed record set against the required-column contract.

    Parameters
    ----------
    records : Sequence[Mapping[str, str]]
        Output of ``parse_csv``.
    required : Sequence[str], optional
        Column names that must be present. Defaults to ``REQUIRED_COLUMNS``.

    Raises
    ------
    EmptyOrInvalidFileError
        If ``records`` is empty.
    MissingColumnsError
        If any required column is absent; ``missing_columns`` keeps the
        order of ``required``.
    """
    if not records:
        raise EmptyOrInvalidFileError()
    missing = find_missing_columns(records, required)
    if missing:
        raise MissingColumnsError(missing)
