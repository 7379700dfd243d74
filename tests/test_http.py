from typing import Any

import httpx
import pytest
import respx

from lazypages import HTTPError, PageProvider, Paginator
from lazypages.http import HTTPPageProvider

URL = "http://api.example.test/items"


def page_response(items, total=None):
    payload = {'items': items}
    if total is not None:
        payload['total'] = total
    return httpx.Response(200, json=payload)


@respx.mock
async def test_fetch_page_sends_page_params():
    route = respx.get(URL).mock(return_value=page_response([1, 2, 3]))

    async with HTTPPageProvider(URL, page_size=3) as provider:
        page = await provider.fetch_page(4)

    assert page.page_number == 4
    assert page.items == (1, 2, 3)
    assert route.calls.last.request.url.params['page'] == '4'
    assert route.calls.last.request.url.params['per_page'] == '3'


@respx.mock
async def test_bare_list_payload():
    respx.get(URL).mock(return_value=httpx.Response(200, json=['a', 'b']))

    async with HTTPPageProvider(URL, page_size=2) as provider:
        page = await provider.fetch_page(0)

    assert page.items == ('a', 'b')
    assert provider.total_items is None


@respx.mock
async def test_empty_items_and_not_found_are_empty():
    def respond(request):
        if request.url.params['page'] == '0':
            return page_response([])
        return httpx.Response(404)

    respx.get(URL).mock(side_effect=respond)

    async with HTTPPageProvider(URL) as provider:
        assert await provider.fetch_page(0) is None
        assert await provider.fetch_page(1) is None


@respx.mock
async def test_server_error_raises():
    respx.get(URL).mock(return_value=httpx.Response(500))

    async with HTTPPageProvider(URL) as provider:
        with pytest.raises(HTTPError):
            await provider.fetch_page(0)


@respx.mock
async def test_total_bounds_can_fetch_page():
    respx.get(URL).mock(return_value=page_response(list(range(10)), total=25))

    async with HTTPPageProvider(URL, page_size=10) as provider:
        assert provider.can_fetch_page(7)
        await provider.fetch_page(0)

        assert provider.total_items == 25
        assert provider.can_fetch_page(2)
        assert not provider.can_fetch_page(3)
        assert not provider.can_fetch_page(-1)


@respx.mock
async def test_total_from_header():
    respx.get(URL).mock(return_value=httpx.Response(200, json=[1], headers={'X-Total-Count': '1'}))

    async with HTTPPageProvider(URL, page_size=1) as provider:
        await provider.fetch_page(0)
        assert provider.total_items == 1
        assert not provider.can_fetch_page(1)


@respx.mock
async def test_paginator_over_http(collect):
    def respond(request):
        n = int(request.url.params['page'])
        return page_response([n * 10 + i for i in range(10)][:5 if n == 2 else 10], total=25)

    route = respx.get(URL).mock(side_effect=respond)

    async with HTTPPageProvider(URL, page_size=10) as provider:
        async with Paginator(provider, preload_page_count=2, max_page_cache_size=3) as paginator:
            pass

        assert paginator.cached_page_numbers == [0, 1, 2]
        assert route.call_count == 3

        paginator.get_next_page(collect)
        paginator.get_next_page(collect)
        paginator.get_next_page(collect)

    assert [p.page_number if p else None for p in collect.pages] == [1, 2, None]
    assert len(collect.pages[1]) == 5


@respx.mock
async def test_paginator_logs_http_failures(collect, caplog):
    respx.get(URL).mock(return_value=httpx.Response(503))

    async with HTTPPageProvider(URL) as provider:
        async with Paginator(provider) as paginator:
            pass

    assert not paginator.ready
    assert 'status code 503' in caplog.text


@respx.mock
async def test_one_based_api_reaches_last_page(collect):
    def respond(request):
        n = int(request.url.params['page'])
        if not 1 <= n <= 3:
            return httpx.Response(404)
        return page_response(list(range((n - 1) * 10, min(n * 10, 25))), total=25)

    respx.get(URL).mock(side_effect=respond)

    async with HTTPPageProvider(URL, page_size=10, first_page=1) as provider:
        async with Paginator(provider, page_number_starts_from=1) as paginator:
            pass

        assert not provider.can_fetch_page(0)
        assert provider.can_fetch_page(3)
        assert not provider.can_fetch_page(4)

        for _ in range(3):
            paginator.get_next_page(collect)
            await paginator.join()

    assert [p.page_number if p else None for p in collect.pages] == [2, 3, None]
    assert len(collect.pages[1]) == 5


def test_provider_accepts_any_item_type():
    assert HTTPPageProvider.__orig_bases__ == (PageProvider[Any],)
