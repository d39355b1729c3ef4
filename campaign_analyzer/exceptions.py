"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used throughout the codebase to represent the failure
modes of an upload (empty file, missing columns, unreadable file), of the
insight request boundary and of configuration and export. Upload and insight
failures are carried back to callers as values inside result objects, so the
``to_dict`` representation doubles as the structured payload the dashboard
renders and logs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Mapping

from campaign_analyzer.config import (
    EMPTY_OR_INVALID_MESSAGE,
    FILE_READ_FAILED_MESSAGE,
    MISSING_COLUMNS_MESSAGE,
)


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'MISSING_COLUMNS'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class DataValidationError(AppError):
    """Raised for data that fails schema or content validation."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "DATA_VALIDATION_ERROR",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code, message, context=context, transient=False)


class EmptyOrInvalidFileError(DataValidationError):
    """Raised when a CSV yields no records (no header, or a header without data)."""

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            EMPTY_OR_INVALID_MESSAGE, code="EMPTY_OR_INVALID_FILE", context=context
        )


class MissingColumnsError(DataValidationError):
    """Raised when required columns are absent from the CSV header.

    Parameters
    ----------
    missing_columns : Sequence[str]
        Missing column names, in required-column order.
    """

    __slots__ = ("missing_columns",)

    def __init__(
        self,
        missing_columns: Sequence[str],
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.missing_columns = list(missing_columns)
        merged = {"missing_columns": self.missing_columns, **dict(context or {})}
        super().__init__(
            MISSING_COLUMNS_MESSAGE.format(columns=", ".join(self.missing_columns)),
            code="MISSING_COLUMNS",
            context=merged,
        )


class FileReadError(AppError):
    """Raised when the uploaded file cannot be opened or read."""

    def __init__(
        self,
        message: str = FILE_READ_FAILED_MESSAGE,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__("FILE_READ_ERROR", message, context=context, transient=False)


class ExternalServiceError(AppError):
    """Raised for unexpected failures from an external service."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "EXTERNAL_SERVICE_ERROR",
        context: Mapping[str, Any] | None = None,
        transient: bool = True,
    ) -> None:
        super().__init__(code, message, context=context, transient=transient)


class InsightRequestError(ExternalServiceError):
    """Raised when the AI insight endpoint fails or returns an unusable body."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            f"Failed to generate insights. {message}",
            code="INSIGHT_REQUEST_ERROR",
            context=context,
            transient=False,
        )


class ExportError(AppError):
    """Raised when the aggregate table cannot be written to disk."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("EXPORT_ERROR", message, context=context, transient=False)
