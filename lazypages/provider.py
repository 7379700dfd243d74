import asyncio

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from .exceptions import ProviderFetchError
from .pages import Page

T = TypeVar('T')


class PageProvider(ABC, Generic[T]):
    """Source of pages consumed by :class:`~lazypages.paginator.Paginator`.

    ``fetch_page`` returns a page, or ``None`` when the page number has no
    data; any exception it raises is treated as a failed fetch.
    ``can_fetch_page`` must be a pure predicate that agrees with
    ``fetch_page``.
    """

    @abstractmethod
    async def fetch_page(self, page_number: int) -> Optional[Page[T]]:
        ...

    @abstractmethod
    def can_fetch_page(self, page_number: int) -> bool:
        ...


class FetchStatus(Enum):
    OK = 'ok'
    EMPTY = 'empty'
    ERROR = 'error'


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    status: FetchStatus
    page: Optional[Page[T]] = None
    error: Optional[ProviderFetchError] = None

    @classmethod
    def ok(cls, page):
        return cls(FetchStatus.OK, page=page)

    @classmethod
    def empty(cls):
        return cls(FetchStatus.EMPTY)

    @classmethod
    def failed(cls, error):
        return cls(FetchStatus.ERROR, error=error)


async def fetch_result(provider: PageProvider[T], page_number: int) -> FetchResult[T]:
    """Fetch one page and fold the outcome into a :class:`FetchResult`."""
    try:
        page = await provider.fetch_page(page_number)
    except asyncio.CancelledError:
        raise
    except ProviderFetchError as e:
        return FetchResult.failed(e)
    except Exception as e:
        error = ProviderFetchError(page_number, f"Failed to fetch page {page_number}: {e!r}")
        error.__cause__ = e
        return FetchResult.failed(error)

    if page is None:
        return FetchResult.empty()

    return FetchResult.ok(page)
