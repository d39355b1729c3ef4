"""Comma-separated text to record conversion for contact exports.

The parser is deliberately narrow: it understands comma-separated lines with
optional double-quoted fields and nothing else. Escaped quotes (``""``) inside
a quoted field and newlines embedded in quoted fields are not supported.

Examples
--------
>>> parse_csv("A,B,C\\n1,2,3")
[{'A': '1', 'B': '2', 'C': '3'}]
>>> parse_csv('Name,Tag\\n"a,b",c')
[{'Name': 'a,b', 'Tag': 'c'}]
>>> parse_csv("A,B")
[]
"""

from __future__ import annotations

import re

# A quoted span (non-greedy) or a run of non-comma, non-quote characters,
# accepted only when followed by a separator or the end of the line.
FIELD_PATTERN = re.compile(r'("(?:.*?)"|[^",]+)(?=\s*,|\s*$)')


def _usable_lines(text: str) -> list[str]:
    lines = text.replace("\r", "").split("\n")
    return [line for line in lines if line.strip() != ""]


def split_header(text: str) -> list[str]:
    """Return the trimmed header tokens of ``text`` (empty list if none).

    Parameters
    ----------
    text : str
        Raw CSV text.

    Returns
    -------
    list[str]
        Header column names in file order; duplicates are kept.
    """
    if not text:
        return []
    lines = _usable_lines(text)
    if not lines:
        return []
    return [token.strip() for token in lines[0].split(",")]


def tokenize_line(line: str) -> list[str]:
    """Split one data line into cleaned field values.

    Double quotes are removed from every matched field and surrounding
    whitespace is stripped.

    Parameters
    ----------
    line : str
        A single data line without its newline.

    Returns
    -------
    list[str]
        Field values in order of appearance.
    """
    return [match.replace('"', "").strip() for match in FIELD_PATTERN.findall(line)]


def parse_csv(text: str) -> list[dict[str, str]]:
    r"""Parse raw CSV text into an ordered list of flat string records.

    Carriage returns are removed, lines that are blank after trimming are
    discarded, and the first remaining line becomes the header. Each later
    line becomes one record mapping header tokens to field values by
    position.

    Parameters
    ----------
    text : str
        The raw CSV document.

    Returns
    -------
    list[dict[str, str]]
        One record per data line. Empty when ``text`` is empty or fewer than
        two usable lines remain (no header, or header without data).

    Notes
    -----
    - Lines with fewer fields than headers receive ``""`` for the missing
      trailing columns; surplus fields are ignored.
    - Duplicate header names are not de-duplicated: the value at the last
      position of a repeated name is the one kept.
    """
    if not text:
        return []
    lines = _usable_lines(text)
    if len(lines) < 2:
        return []

    header = [token.strip() for token in lines[0].split(",")]
    records: list[dict[str, str]] = []
    for line in lines[1:]:
        values = tokenize_line(line)
        record: dict[str, str] = {}
        for index, key in enumerate(header):
            record[key] = values[index] if index < len(values) else ""
        records.append(record)
    return records
