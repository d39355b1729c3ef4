"""Tests for prompt serialization of the aggregate table."""

from campaign_analyzer.pipeline.aggregation import DrillDown, aggregate
from campaign_analyzer.pipeline.insights import build_payload, build_prompt, summarize


def test_summarize_flat_mode_lists_every_header(sample_records):
    table = aggregate(sample_records, "Ad Group Name", DrillDown.DEPARTMENT)
    lines = summarize(table).split("\n")
    assert lines[0] == (
        "Group B (Total: 3): Engineering: 2 (66.7%), Executive: 0 (0%), "
        "Finance: 0 (0%), Sales: 0 (0%)"
    )
    assert lines[1] == (
        "Group A (Total: 2): Engineering: 0 (0%), Executive: 0 (0%), "
        "Finance: 1 (50.0%), Sales: 1 (50.0%)"
    )


def test_summarize_combined_mode_uses_outer_counts(sample_records):
    table = aggregate(sample_records, "Ad Group Name", DrillDown.COMBINED)
    assert summarize(table).split("\n")[0] == (
        "Group B (Total: 3): High: 2 (66.7%), Low: 1 (33.3%)"
    )


def test_summarize_without_drill_down(sample_records):
    table = aggregate(sample_records, "Ad Campaign Name", DrillDown.NONE)
    assert summarize(table) == (
        "Spring Promo (Total: 4): No breakdown\nSummer Launch (Total: 2): No breakdown"
    )


def test_build_prompt_embeds_dimension_drill_down_and_summary(sample_records):
    table = aggregate(sample_records, "Ad Group Name", DrillDown.LIFECYCLE)
    prompt = build_prompt(table)
    assert 'grouped by "Ad Group Name" and drilled down by "lifecycle"' in prompt
    assert summarize(table) in prompt
    assert prompt.startswith("You are a marketing campaign analyst.")


def test_build_payload_shape():
    assert build_payload("hello") == {
        "contents": [{"role": "user", "parts": [{"text": "hello"}]}]
    }
