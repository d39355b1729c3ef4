"""insights.client module.

This module defines the `InsightAPIClient` class, the asynchronous networking
boundary for narrative-insight requests. Its only job is to POST a
``generateContent`` payload to the configured endpoint, retry transient
failures, and return the narrative text found at
``candidates[0].content.parts[0].text``.

The client never raises for request failures. It always returns a
``(ok, text, raw)`` tuple so that
:class:`~campaign_analyzer.pipeline.insights.service.InsightService` can
translate failures into :class:`~campaign_analyzer.exceptions.InsightRequestError`.

Examples
--------
>>> import aiohttp
>>> from campaign_analyzer.pipeline.insights.client import InsightAPIClient
>>> class DummyConfig:
...     endpoint = "http://example.com/v1/models/m:generateContent"
...     api_key = "secret"
...     max_retries = 1
...     backoff_factor = 0.1
...     request_timeout = 3
>>> client = InsightAPIClient(DummyConfig())
>>> async def main():
...     async with aiohttp.ClientSession() as session:
...         ok, text, raw = await client.generate(session, {"contents": []})
>>> # import asyncio; asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)


def extract_candidate_text(data: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or ``None`` for any other shape.

    An empty string counts as no content; whitespace-only text is returned as is.

    Examples
    --------
    >>> extract_candidate_text({"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})
    'hi'
    >>> extract_candidate_text({"candidates": []}) is None
    True
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


class InsightAPIClient:
    r"""Asynchronous client for the generative-text insight endpoint.

    Attributes
    ----------
    config : Any
        Configuration object (e.g., `GeminiConfig`) providing ``endpoint``,
        ``api_key``, retry limits and timeouts. Optional attributes are read
        with ``getattr`` defaults.

    Notes
    -----
    Rate limiting is applied by the caller (`InsightService`) through
    `aiolimiter`. The session is injected and never closed here.
    """

    def __init__(self, config: Any) -> None:
        self.config = config

    async def _sleep_before_retry(self, attempt: int) -> None:
        await asyncio.sleep(getattr(self.config, "backoff_factor", 2.0) ** attempt)

    async def generate(
        self, session: aiohttp.ClientSession, payload: dict[str, Any]
    ) -> tuple[bool, str | None, dict[str, Any] | None]:
        r"""Send ``payload`` and return the narrative text or error details.

        Handles:
          * Configuration errors (no endpoint or API key)
          * Network issues (retries on aiohttp.ClientError and TimeoutError)
          * HTTP 429 with sleep-and-retry
          * HTTP 5xx with exponential backoff
          * Other non-2xx statuses and malformed bodies (returned immediately)

        Parameters
        ----------
        session : aiohttp.ClientSession
            Session used for the POST. Not closed by this method.
        payload : dict[str, Any]
            JSON body, usually from ``build_payload``.

        Returns
        -------
        tuple[bool, str or None, dict[str, Any] or None]
            ``(ok, text, raw)`` where ``raw`` is the decoded JSON response on
            success or a dict describing the failure (``error_type``,
            ``status_code``, ``message``...).
        """
        endpoint = getattr(self.config, "endpoint", "")
        api_key = getattr(self.config, "api_key", "")
        if not endpoint or not api_key:
            return (
                False,
                None,
                {
                    "error_type": "ConfigurationError",
                    "message": "Insight endpoint or API key not set.",
                },
            )

        headers = {"Content-Type": "application/json", "x-goog-api-key": str(api_key)}
        max_retries = getattr(self.config, "max_retries", 2)

        for attempt in range(max_retries + 1):
            try:
                async with session.post(
                    endpoint,
                    json=payload,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(
                        total=getattr(self.config, "request_timeout", 60)
                    ),
                ) as response:
                    status = response.status
                    text = await response.text()

                    if 200 <= status < 300:
                        try:
                            data = json.loads(text)
                        except json.JSONDecodeError:
                            return (
                                False,
                                None,
                                {
                                    "error_type": "MalformedResponse",
                                    "message": "Response body is not JSON.",
                                    "raw_response_text": text,
                                },
                            )
                        narrative = extract_candidate_text(data)
                        if narrative is None:
                            return (
                                False,
                                None,
                                {
                                    "error_type": "MalformedResponse",
                                    "message": "No content received from the API.",
                                    "response": data,
                                },
                            )
                        return True, narrative, data

                    if status == 429 and attempt < max_retries:
                        logger.warning("Insight endpoint rate limited (429), retrying")
                        await asyncio.sleep(
                            getattr(self.config, "retry_sleep_on_429", 30)
                            * (attempt + 1)
                        )
                        continue

                    if status >= 500 and attempt < max_retries:
                        logger.warning("Insight endpoint returned %d, retrying", status)
                        await self._sleep_before_retry(attempt)
                        continue

                    return (
                        False,
                        None,
                        {
                            "error_type": "HTTPError",
                            "status_code": status,
                            "message": f"API request failed with status {status}",
                            "error_body": text,
                        },
                    )

            except aiohttp.ClientError as e:
                if attempt < max_retries:
                    await self._sleep_before_retry(attempt)
                    continue
                return False, None, {"error_type": "ClientError", "message": str(e)}
            except TimeoutError:
                if attempt < max_retries:
                    await self._sleep_before_retry(attempt)
                    continue
                return (
                    False,
                    None,
                    {"error_type": "TimeoutError", "message": "Request timed out."},
                )

        return False, None, {"error_type": "RetryExhausted", "message": "No attempts left."}
