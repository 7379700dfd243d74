import asyncio

import pytest

from lazypages.demo import InMemoryPageProvider


class RecordingProvider(InMemoryPageProvider):
    """In-memory provider that remembers fetch order and concurrency."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fetched = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_page(self, page_number):
        self.fetched.append(page_number)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            # Yield at least once, so overlapping fetches would show up.
            await asyncio.sleep(0)
            return await super().fetch_page(page_number)
        finally:
            self.in_flight -= 1


class OptimisticProvider(InMemoryPageProvider):
    """Claims every page is fetchable, but only has data for some."""

    def can_fetch_page(self, page_number):
        return page_number >= 0


@pytest.fixture
def provider():
    return RecordingProvider(103, 10)


@pytest.fixture
def slow_provider():
    return RecordingProvider(103, 10, latency=0.01)


class Collector:
    def __init__(self):
        self.pages = []

    def __call__(self, page):
        self.pages.append(page)

    @property
    def last(self):
        return self.pages[-1]


@pytest.fixture
def collect():
    return Collector()
