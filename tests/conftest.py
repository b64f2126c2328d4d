"""
Shared fixtures: sample report records, stores, and a fake HTTP session for
exercising RestReportStore without a network.
"""

import os
import sys

import pytest

# Ensure project root is on path
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT_DIR)

from models import Report  # noqa: E402
from store import MemoryReportStore  # noqa: E402


SAMPLE_RECORDS = [
    {
        "id": 1,
        "address": "123 Main St",
        "leak_type": "Burst Pipe",
        "created_at": "2025-06-07T10:00:00Z",
        "resolved": False,
        "district": "District A",
        "Description": "Severe water burst",
    },
    {
        "id": 2,
        "address": "456 Park Ave",
        "leak_type": "Minor Leak",
        "created_at": "2025-06-06T14:30:00Z",
        "resolved": True,
        "district": "District B",
        "Description": "Dripping tap",
    },
]

WIDE_START = "2000-01-01"
WIDE_END = "2099-12-31"


@pytest.fixture
def records():
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def reports(records):
    return [Report.model_validate(r) for r in records]


@pytest.fixture
def memory_store(records):
    return MemoryReportStore(records)


# ============================================================================
# Fake HTTP layer
# ============================================================================


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses or raises."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.responses = []

    def queue(self, response):
        self.responses.append(response)
        return self

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def patch(self, url, **kwargs):
        return self._next("PATCH", url, **kwargs)


@pytest.fixture
def fake_session():
    return FakeSession()
