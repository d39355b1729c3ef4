"""Tests for InsightService request coordination and stale tracking."""

from types import SimpleNamespace

import pytest

from conftest import FakeLimiter

from campaign_analyzer.exceptions import InsightRequestError
from campaign_analyzer.pipeline.aggregation import DrillDown, aggregate
from campaign_analyzer.pipeline.insights import InsightService


class StubClient:
    def __init__(self, result):
        self.result = result
        self.payloads = []
        self.sessions = []

    async def generate(self, session, payload):
        self.sessions.append(session)
        self.payloads.append(payload)
        return self.result


def make_service(result) -> tuple[InsightService, StubClient]:
    client = StubClient(result)
    service = InsightService(
        SimpleNamespace(target_rpm=10), client=client, limiter=FakeLimiter()
    )
    return service, client


@pytest.mark.asyncio
async def test_success_result_carries_text_and_prompt_payload(sample_records):
    service, client = make_service((True, "Narrative", {"candidates": []}))
    table = aggregate(sample_records, "Ad Group Name", DrillDown.ICP)
    session = object()
    result = await service.request_insights(table, session=session)
    assert result.ok and result.text == "Narrative" and result.error is None
    assert client.sessions == [session]
    text = client.payloads[0]["contents"][0]["parts"][0]["text"]
    assert "Group B (Total: 3): High: 2 (66.7%), Low: 1 (33.3%)" in text


@pytest.mark.asyncio
async def test_failure_becomes_insight_request_error(sample_records):
    service, _ = make_service(
        (False, None, {"error_type": "HTTPError", "status_code": 500, "message": "API request failed with status 500", "error_body": "x"})
    )
    result = await service.request_insights(aggregate(sample_records, "Ad Group Name"), session=object())
    assert result.ok is False
    assert isinstance(result.error, InsightRequestError)
    assert result.error.message == "Failed to generate insights. API request failed with status 500"
    assert result.error.context == {"error_type": "HTTPError", "status_code": 500}


@pytest.mark.asyncio
async def test_missing_error_details_still_produce_error(sample_records):
    service, _ = make_service((False, None, None))
    result = await service.request_insights(aggregate(sample_records, "Ad Group Name"), session=object())
    assert result.error.message == "Failed to generate insights. Unknown error."


@pytest.mark.asyncio
async def test_results_become_stale_after_newer_request_or_invalidate(sample_records):
    service, _ = make_service((True, "N", {}))
    table = aggregate(sample_records, "Ad Group Name")
    first = await service.request_insights(table, session=object())
    assert service.is_current(first)
    second = await service.request_insights(table, session=object())
    assert second.request_id > first.request_id
    assert not service.is_current(first) and service.is_current(second)
    service.invalidate()
    assert not service.is_current(second)
    assert service.latest_request_id > second.request_id
