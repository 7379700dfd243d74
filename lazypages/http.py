import logging

from typing import Any

import httpx

from .exceptions import HTTPError
from .pages import Page
from .provider import PageProvider

log = logging.getLogger(__name__)


class HTTPPageProvider(PageProvider[Any]):
    """Page provider backed by a JSON API paginated with query parameters.

    A response body may either be a bare list of items, or an object holding
    the items under ``items_key`` and, optionally, the total item count under
    ``total_key``. The total may also come from an ``X-Total-Count`` header.
    Once the total is known, ``can_fetch_page`` answers from it.

    :param url: endpoint to request pages from
    :param page_size: items per page, sent as ``size_param``
    :param first_page: number the API gives its first page
    """

    def __init__(self, url: str, *, page_size=25, page_param='page', size_param='per_page',
                 items_key='items', total_key='total', first_page=0, httpx_args=None):
        httpx_args = httpx_args or {}

        self.url = url
        self.page_size = page_size
        self.page_param = page_param
        self.size_param = size_param
        self.items_key = items_key
        self.total_key = total_key
        self.first_page = first_page
        self.total_items = None
        self.client = httpx.AsyncClient(http2=True, **httpx_args)

    def _remember_total(self, r, payload):
        total = None

        if isinstance(payload, dict):
            total = payload.get(self.total_key)
        if total is None:
            total = r.headers.get('X-Total-Count')

        if total is not None:
            self.total_items = int(total)

    async def fetch_page(self, page_number):
        params = {self.page_param: page_number, self.size_param: self.page_size}
        r = await self.client.get(self.url, params=params)

        if r.status_code == 404:
            return None
        if r.status_code != 200:
            raise HTTPError(f"Got status code {r.status_code} for {r.url}")

        payload = r.json()
        self._remember_total(r, payload)

        items = payload.get(self.items_key, []) if isinstance(payload, dict) else payload
        log.debug("Fetched %d items for page %d from %s", len(items), page_number, self.url)

        if not items:
            return None

        return Page(page_number, self.page_size, items)

    def can_fetch_page(self, page_number):
        if page_number < self.first_page:
            return False
        if self.total_items is None:
            return True

        return (page_number - self.first_page) * self.page_size < self.total_items

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
