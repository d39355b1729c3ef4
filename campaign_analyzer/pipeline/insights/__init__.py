"""AI insight boundary: prompt serialization, configuration, client and service.

Modules exported
----------------
summarize, build_prompt, build_payload
    Pure serialization of an aggregate table into the request body.
GeminiConfig
    Environment-backed endpoint configuration.
InsightAPIClient
    aiohttp client returning ``(ok, text, raw)`` tuples.
InsightService, InsightResult
    Rate-limited request coordination with stale-response tracking.
"""

from __future__ import annotations

from .client import InsightAPIClient, extract_candidate_text
from .config import GeminiConfig
from .service import InsightResult, InsightService
from .summarizer import build_payload, build_prompt, summarize

__all__ = [
    "GeminiConfig",
    "InsightAPIClient",
    "InsightResult",
    "InsightService",
    "build_payload",
    "build_prompt",
    "extract_candidate_text",
    "summarize",
]
