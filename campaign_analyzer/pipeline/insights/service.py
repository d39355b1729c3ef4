"""InsightService: request narrative insights for the current aggregate view.

The service turns an :class:`AggregateTable` into a prompt, throttles
requests with an :class:`aiolimiter.AsyncLimiter`, calls
:class:`InsightAPIClient`, and returns an :class:`InsightResult` value.

The aggregation core exposes no request identity, so the service does: every
request gets a monotonically increasing id, and any state change the caller
reports through :meth:`InsightService.invalidate` makes older results stale.
Callers check :meth:`InsightService.is_current` before displaying a result.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp
from aiolimiter import AsyncLimiter

from campaign_analyzer.exceptions import InsightRequestError
from campaign_analyzer.pipeline.aggregation.models import AggregateTable

from .client import InsightAPIClient
from .summarizer import build_payload, build_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsightResult:
    """Outcome of one insight request.

    Attributes
    ----------
    request_id : int
        Identity of the request that produced this result.
    ok : bool
        True when narrative text was received.
    text : str
        Narrative text (empty on failure).
    error : InsightRequestError | None
        Failure details, or ``None`` on success.
    """

    request_id: int
    ok: bool
    text: str = ""
    error: InsightRequestError | None = None


class InsightService:
    """Coordinate prompt building, rate limiting and the API client.

    Parameters
    ----------
    config : Any
        Configuration object (usually ``GeminiConfig``).
    client : InsightAPIClient | None, optional
        Injected client; built from ``config`` when omitted.
    limiter : AsyncLimiter | None, optional
        Injected limiter; defaults to ``target_rpm`` requests per 60 seconds.
    """

    def __init__(
        self,
        config: Any,
        client: InsightAPIClient | None = None,
        limiter: AsyncLimiter | None = None,
    ) -> None:
        self.config = config
        self.client = client or InsightAPIClient(config)
        self.limiter = limiter or AsyncLimiter(getattr(config, "target_rpm", 15), 60)
        self._ids = itertools.count(1)
        self._latest_id = 0

    @property
    def latest_request_id(self) -> int:
        return self._latest_id

    def invalidate(self) -> None:
        """Mark every request issued so far as stale."""
        self._latest_id = next(self._ids)
        logger.debug("Insight requests invalidated up to id %d", self._latest_id)

    def is_current(self, result: InsightResult) -> bool:
        """Return True if ``result`` belongs to the latest request."""
        return result.request_id == self._latest_id

    async def request_insights(
        self,
        table: AggregateTable,
        session: aiohttp.ClientSession | None = None,
    ) -> InsightResult:
        """Ask the AI endpoint to narrate ``table``.

        Parameters
        ----------
        table : AggregateTable
            The current aggregate view.
        session : aiohttp.ClientSession | None, optional
            Session to reuse; a temporary one is opened when omitted.

        Returns
        -------
        InsightResult
            Success with narrative text, or failure carrying an
            ``InsightRequestError``. Never raises for request failures.
        """
        request_id = next(self._ids)
        self._latest_id = request_id
        payload = build_payload(build_prompt(table))
        logger.info(
            "Requesting insights #%d for %d rows (%s / %s)",
            request_id,
            len(table.rows),
            table.dimension,
            table.drill_down.value,
        )

        async with self.limiter:
            if session is None:
                async with aiohttp.ClientSession() as own_session:
                    ok, text, raw = await self.client.generate(own_session, payload)
            else:
                ok, text, raw = await self.client.generate(session, payload)

        if ok and text:
            return InsightResult(request_id=request_id, ok=True, text=text)

        details = raw or {}
        error = InsightRequestError(
            str(details.get("message", "Unknown error.")),
            context={
                key: value
                for key, value in details.items()
                if key in ("error_type", "status_code")
            },
        )
        logger.error("Insight request #%d failed: %s", request_id, error)
        return InsightResult(request_id=request_id, ok=False, error=error)
