import asyncio
import pytest
from crawler_api.core import config

class FakeFetcher:
    """Serves canned bodies by URL and records every call."""

    def __init__(self, pages=None, delay=0.0):
        self.pages = pages or {}
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url, proxy=None):
        self.calls.append((url, proxy))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            page = self.pages.get(url, b"")
            if isinstance(page, Exception):
                raise page
            return page
        finally:
            self.in_flight -= 1

@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Direct connections and fast disconnect polling for every test"""
    monkeypatch.delenv("CRAWLER_PROXY", raising=False)
    monkeypatch.setattr(config.Settings, "DISCONNECT_POLL_SECONDS", 0.05)
    monkeypatch.setattr(config.Settings, "MAX_CONCURRENCY", 0)
    yield

@pytest.fixture
def fake_fetcher():
    return FakeFetcher()

@pytest.fixture
def fetcher_factory():
    return FakeFetcher
