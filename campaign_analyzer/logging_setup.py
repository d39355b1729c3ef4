"""Logging configuration shared by the CLI and the interactive dashboard."""

from __future__ import annotations

import logging
import os

from campaign_analyzer.config import LOG_DIR, LOG_FILENAME, LOG_FORMAT


def file_logging_disabled() -> bool:
    """Return True when ``DISABLE_FILE_LOGS`` or a pytest run is detected."""
    return bool(
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure the root logger for console and optional file output.

    All existing root handlers are removed and replaced by a
    ``StreamHandler`` and, when ``enable_file`` is true, a ``FileHandler``
    appending to ``LOG_DIR / LOG_FILENAME``. A log directory that cannot be
    created downgrades to console-only logging with a warning.

    Parameters
    ----------
    level : str, optional
        Level name such as ``"DEBUG"`` or ``"INFO"``. Unknown names fall back
        to ``INFO``.
    enable_file : bool, optional
        Whether to add the file handler. Defaults to True.

    Examples
    --------
    >>> configure_logging("DEBUG", enable_file=False)
    >>> import logging; logging.getLogger("x").debug("message")
    """
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(0, logging.FileHandler(LOG_DIR / LOG_FILENAME, mode="a"))
        except OSError as err:
            file_error = err
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logging.getLogger(__name__).warning(
            "File logging disabled: %s", file_error
        )
