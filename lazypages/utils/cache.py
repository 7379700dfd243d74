from collections import OrderedDict


class PageCache:
    """Page number to page mapping with least-recently-used eviction.

    Eviction only happens when ``max_size`` is greater than one; otherwise the
    cache degenerates into a plain unbounded map.
    """

    def __init__(self, max_size=0):
        self.max_size = max_size
        self._pages = OrderedDict()

    @property
    def enabled(self):
        return self.max_size > 1

    def get(self, page_number):
        if (page := self._pages.get(page_number)) is None:
            return None

        if self.enabled:
            self._pages.move_to_end(page_number)

        return page

    def peek(self, page_number):
        return self._pages.get(page_number)

    def put(self, page_number, page):
        """Insert or refresh a page; return the evicted page number, if any."""
        evicted = None

        if page_number in self._pages:
            self._pages[page_number] = page
            if self.enabled:
                self._pages.move_to_end(page_number)
            return evicted

        if self.enabled and len(self._pages) >= self.max_size:
            evicted, _ = self._pages.popitem(last=False)

        self._pages[page_number] = page
        return evicted

    def page_numbers(self):
        """Resident page numbers, least recently used first."""
        return list(self._pages)

    def clear(self):
        self._pages.clear()

    def __contains__(self, page_number):
        return page_number in self._pages

    def __len__(self):
        return len(self._pages)
