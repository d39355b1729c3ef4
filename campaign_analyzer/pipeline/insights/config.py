"""Configuration and environment loader for the AI insight client.

This module provides GeminiConfig, which loads, validates, and exposes the
settings required to call the generative-text endpoint that writes narrative
insights for the aggregate table.

Role in Architecture
--------------------
- Forms the boundary between the process environment (and an optional
  project ``.env`` file) and the strongly-typed runtime config.
- Single source of truth for endpoint URI, retries/backoff, timeouts and the
  request rate limit.
- No client or business logic: only configuration loading and validation.

Examples
--------
>>> import os
>>> os.environ["GEMINI_API_KEY"] = "unit-test"
>>> cfg = GeminiConfig()
>>> cfg.endpoint.endswith(":generateContent")
True
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

import campaign_analyzer.config as _project_config
from campaign_analyzer.config import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_GEMINI_API_BASE,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_SLEEP_ON_429,
    DEFAULT_TARGET_RPM,
)
from campaign_analyzer.exceptions import ConfigurationError


class GeminiConfig:
    r"""Configuration loader and validator for the insight endpoint.

    Attributes
    ----------
    api_key : str
        Key sent in the ``x-goog-api-key`` header.
    api_base : str
        Base URI of the generative-language API.
    model : str
        Model name used to build the ``generateContent`` endpoint.
    max_retries : int
        Maximum retries for transient request errors.
    backoff_factor : float
        Exponential backoff base for retries.
    retry_sleep_on_429 : int
        Seconds to sleep (times attempt number) on HTTP 429.
    request_timeout : int
        Total timeout in seconds for a single request.
    target_rpm : int
        Maximum insight requests per minute.
    endpoint : str
        Complete URI for ``generateContent`` requests.

    Notes
    -----
    Instantiate once per session; no runtime mutation is intended.
    """

    def __init__(self) -> None:
        r"""Initialize from environment variables and the project ``.env``.

        Raises
        ------
        ConfigurationError
            If ``GEMINI_API_KEY`` is not set, or a numeric setting does not
            parse.
        """
        # Resolved through the module so tests can monkeypatch PROJECT_ROOT.
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)

        self.api_key: str = os.getenv("GEMINI_API_KEY", "")
        if not self.api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY for insight generation")
        self.api_base: str = os.getenv("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE)
        self.model: str = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
        try:
            self.max_retries = int(os.getenv("MAX_RETRIES", DEFAULT_MAX_RETRIES))
            self.backoff_factor = float(
                os.getenv("BACKOFF_FACTOR", DEFAULT_BACKOFF_FACTOR)
            )
            self.retry_sleep_on_429 = int(
                os.getenv("RETRY_SLEEP_ON_429", DEFAULT_RETRY_SLEEP_ON_429)
            )
            self.request_timeout = int(
                os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
            )
            self.target_rpm = int(os.getenv("TARGET_RPM", DEFAULT_TARGET_RPM))
        except ValueError as err:
            raise ConfigurationError(
                "Invalid numeric insight setting", context={"reason": str(err)}
            ) from err
        if self.target_rpm <= 0:
            raise ConfigurationError("TARGET_RPM must be positive")

    @property
    def endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"
