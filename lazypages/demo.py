import asyncio

from collections import Counter
from dataclasses import dataclass

from .exceptions import ProviderFetchError
from .pages import Page
from .provider import PageProvider


@dataclass(frozen=True)
class ItemData:
    id: int
    name: str

    def __str__(self):
        return f'Id: {self.id}, Name: {self.name}'


class InMemoryPageProvider(PageProvider[ItemData]):
    """Serves ``Item 1 .. Item N`` split into fixed-size pages.

    :param latency: seconds to sleep per fetch, to mimic a remote source
    :param failing_pages: page numbers whose fetch raises
    :param first_page: number of the first page
    """

    def __init__(self, total_items, items_per_page, *, latency=0.0, failing_pages=(), first_page=0):
        if items_per_page < 1:
            raise ValueError(f"Items per page must be positive, got {items_per_page}")

        self.total_items = total_items
        self.items_per_page = items_per_page
        self.latency = latency
        self.failing_pages = set(failing_pages)
        self.first_page = first_page
        self.fetch_count = Counter()

        items = [ItemData(i, f'Item {i + 1}') for i in range(total_items)]
        self.pages = [Page(first_page + n, items_per_page, items[begin:begin + items_per_page])
                      for n, begin in enumerate(range(0, total_items, items_per_page))]

    @property
    def page_count(self):
        return len(self.pages)

    async def fetch_page(self, page_number):
        self.fetch_count[page_number] += 1

        if self.latency:
            await asyncio.sleep(self.latency)
        if page_number in self.failing_pages:
            raise ProviderFetchError(page_number, f"Simulated failure for page {page_number}")

        if self.can_fetch_page(page_number):
            return self.pages[page_number - self.first_page]

        return None

    def can_fetch_page(self, page_number):
        return 0 <= page_number - self.first_page < self.page_count
