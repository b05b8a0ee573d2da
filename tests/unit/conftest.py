"""
Pytest configuration and shared fixtures for unit tests.
"""

import pytest

from cloudfront_events.config import clear_settings_cache
from cloudfront_events.serde import CloudFrontRowParser
from cloudfront_events.utils import BrowserInfo

SAMPLE_ROW = (
    "2020-01-01 00:00:00 EDGE1 1024 10.0.0.1 GET example.com /page 200 "
    "http://ref.example/ Mozilla/5.0 ?foo=bar"
)


class StubClassifier:
    """User-agent classifier that records its inputs and returns a fixed result."""

    def __init__(self, result: BrowserInfo | None = None):
        self.result = result or BrowserInfo(
            name="Stub 1", group="Stub", version="1.0", type="Browser"
        )
        self.calls: list[str] = []

    def classify(self, user_agent: str) -> BrowserInfo:
        self.calls.append(user_agent)
        return self.result


def make_row(**overrides: str) -> str:
    """Build a space-separated CloudFront row, overriding selected tokens."""
    tokens = {
        "date": "2020-01-01",
        "time": "00:00:00",
        "edge_location": "EDGE1",
        "bytes_sent": "1024",
        "client_ip": "10.0.0.1",
        "method": "GET",
        "host": "example.com",
        "path": "/page",
        "status": "200",
        "referrer": "http://ref.example/",
        "user_agent": "Mozilla/5.0",
        "querystring": "?foo=bar",
    }
    tokens.update(overrides)
    return " ".join(tokens.values())


@pytest.fixture
def sample_row() -> str:
    """Return the reference CloudFront row."""
    return SAMPLE_ROW


@pytest.fixture
def stub_classifier() -> StubClassifier:
    """Return a fresh stub classifier."""
    return StubClassifier()


@pytest.fixture
def parser(stub_classifier) -> CloudFrontRowParser:
    """Return a row parser wired to the stub classifier."""
    return CloudFrontRowParser(classifier=stub_classifier)


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Make sure cached settings never leak between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def row_factory():
    """Return a builder for CloudFront rows with selected tokens overridden."""
    return make_row
