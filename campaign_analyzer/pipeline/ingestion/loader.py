"""Upload gate: read, parse and validate a contact export in one step.

Every upload attempt ends in exactly one of three outcomes, returned as an
:class:`UploadResult` value rather than raised:

- ``ok`` with the full record set,
- ``EmptyOrInvalidFileError`` when nothing usable was parsed,
- ``MissingColumnsError`` when required columns are absent.

Reading a file from disk adds a fourth, opaque failure (``FileReadError``).
A failed result never carries records, so callers can keep their previous
record set untouched.

Examples
--------
>>> result = load_contacts_text("A,B\\n1,2")
>>> result.ok, result.error.code
(False, 'MISSING_COLUMNS')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from campaign_analyzer.config import ALLOWED_UPLOAD_EXTENSIONS, UPLOAD_FILE_ENCODING
from campaign_analyzer.exceptions import AppError, DataValidationError, FileReadError

from .csv_parser import parse_csv, split_header
from .validator import validate_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a single upload attempt.

    Attributes
    ----------
    ok : bool
        True when the records passed validation.
    records : list[dict[str, str]]
        The parsed records; always empty on failure.
    error : AppError | None
        The failure, or ``None`` on success.
    source_name : str
        File name (or other label) of the upload.
    """

    ok: bool
    records: list[dict[str, str]] = field(default_factory=list)
    error: AppError | None = None
    source_name: str = ""

    @property
    def message(self) -> str:
        """Return the user-facing error message (empty on success)."""
        return self.error.message if self.error is not None else ""


def load_contacts_text(text: str, source_name: str = "") -> UploadResult:
    """Parse and validate CSV text, returning the outcome as a value.

    Parameters
    ----------
    text : str
        Raw CSV document.
    source_name : str, optional
        Label stored on the result (usually the file name).

    Returns
    -------
    UploadResult
        Success with records, or failure with an ``EmptyOrInvalidFileError``
        or ``MissingColumnsError``.
    """
    records = parse_csv(text)
    try:
        validate_records(records)
    except DataValidationError as err:
        logger.warning("Rejected upload %r: %s", source_name, err)
        logger.debug("Header of rejected upload: %s", split_header(text))
        return UploadResult(ok=False, error=err, source_name=source_name)
    logger.info("Loaded %d records from %r", len(records), source_name)
    return UploadResult(ok=True, records=records, source_name=source_name)


def read_upload_file(path: Path) -> str:
    """Read an uploaded file as text, stripping a UTF-8 byte-order mark.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing the
    upload.

    Raises
    ------
    FileReadError
        If the file cannot be opened or read.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as err:
        raise FileReadError(context={"path": str(path), "reason": str(err)}) from err
    return data.decode(UPLOAD_FILE_ENCODING, errors="replace")


def load_contacts_file(path: Path) -> UploadResult:
    """Read ``path`` and run it through :func:`load_contacts_text`.

    Read failures are returned as a failed ``UploadResult`` carrying a
    ``FileReadError``.
    """
    path = Path(path)
    if path.suffix.lower() not in ALLOWED_UPLOAD_EXTENSIONS:
        logger.warning("Upload %s does not have a .csv extension", path.name)
    try:
        text = read_upload_file(path)
    except FileReadError as err:
        logger.error("Could not read %s: %s", path, err.context.get("reason"))
        return UploadResult(ok=False, error=err, source_name=path.name)
    return load_contacts_text(text, source_name=path.name)
