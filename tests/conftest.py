"""Pytest configuration and shared fixtures.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides contact-record fixtures and fake aiohttp session/response objects.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

HEADER = (
    "Ad Group Name,Ad Campaign Name,Company ICP Priority for Contacts,"
    "Lifecycle Stage,Job Title,Department"
)

SAMPLE_CSV = "\n".join(
    [
        HEADER,
        "Group B,Spring Promo,High,Lead,CTO,Engineering",
        "Group A,Spring Promo,Low,MQL,Analyst,Finance",
        "Group B,Summer Launch,High,MQL,Engineer,Engineering",
        'Group A,Summer Launch,High,Lead,"VP Sales",Sales',
        'Group B,Spring Promo,Low,"",CTO,""',
        '"",Spring Promo,High,Lead,CEO,Executive',
    ]
)


def make_record(**values: str) -> dict[str, str]:
    """Build a contact record with every required column (blank by default)."""
    record = {
        "Ad Group Name": "",
        "Ad Campaign Name": "",
        "Company ICP Priority for Contacts": "",
        "Lifecycle Stage": "",
        "Job Title": "",
        "Department": "",
    }
    aliases = {
        "group": "Ad Group Name",
        "campaign": "Ad Campaign Name",
        "icp": "Company ICP Priority for Contacts",
        "lifecycle": "Lifecycle Stage",
        "title": "Job Title",
        "department": "Department",
    }
    for key, value in values.items():
        record[aliases[key]] = value
    return record


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_records():
    from campaign_analyzer.pipeline.ingestion import parse_csv

    return parse_csv(SAMPLE_CSV)


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "contacts.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


class FakeResponse:
    def __init__(self, status: int, text: str):
        self.status = status
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Replays queued responses and records every POST."""

    def __init__(self, responses):
        self._responses = iter(responses)
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        try:
            return next(self._responses)
        except StopIteration:
            return FakeResponse(500, "{}")


class FakeLimiter:
    async def __aenter__(self):
        """Enter async context (test stub)."""
        return None

    async def __aexit__(self, exc_type, exc, tb):
        """Exit async context (test stub)."""
        return False
