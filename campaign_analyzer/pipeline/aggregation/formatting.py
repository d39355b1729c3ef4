"""Presentation helpers for counts and percentages.

Percentages are never stored on the model; they are derived from
``(count, total)`` at display time.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ONE_DECIMAL = Decimal("0.1")


def format_percentage(count: int, total: int) -> str:
    """Return ``count / total`` as a percentage with one decimal.

    Ties round away from zero (``6.25`` becomes ``6.3``).

    Examples
    --------
    >>> format_percentage(1, 3)
    '33.3'
    >>> format_percentage(2, 2)
    '100.0'
    >>> format_percentage(1, 16)
    '6.3'
    >>> format_percentage(0, 0)
    '0'
    """
    if total <= 0:
        return "0"
    return str(Decimal(count / total * 100).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def format_cell(count: int, total: int) -> str:
    """Render a table cell: ``"0"`` for empty cells, else ``"<n> (<pct>%)"``.

    Examples
    --------
    >>> format_cell(3, 4)
    '3 (75.0%)'
    >>> format_cell(0, 4)
    '0'
    """
    if count <= 0:
        return "0"
    return f"{count} ({format_percentage(count, total)}%)"
