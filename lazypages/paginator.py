import logging

from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from .config import PaginatorConfig
from .exceptions import InternalConsistencyError
from .pages import Page
from .provider import FetchStatus, PageProvider, fetch_result
from .utils.asyncio import TaskSet
from .utils.cache import PageCache

T = TypeVar('T')

PageCallback = Callable[[Optional[Page[T]]], object]

log = logging.getLogger(__name__)


class PaginatorState(Enum):
    UNINITIALIZED = 'uninitialized'
    INITIALIZING = 'initializing'
    READY = 'ready'


class Paginator(Generic[T]):
    """Pull-based paginator over a :class:`PageProvider`.

    Construction schedules the fetch of the first page on the running event
    loop, followed by a sequential preload of up to ``preload_page_count``
    further pages. Page requests report their result through a callback; they
    are silently ignored until the first page has been answered.

    :param provider: where pages come from
    :param preload_page_count: number of pages after the first to preload
    :param max_page_cache_size: LRU bound; caching is enabled only above 1
    :param page_number_starts_from: first valid page number
    :param logger: log sink; anything with ``debug/info/error`` will do
    """

    def __init__(self, provider: PageProvider[T], preload_page_count=0, max_page_cache_size=0, *,
                 page_number_starts_from=0, logger=None):
        self.config = PaginatorConfig(page_number_starts_from=page_number_starts_from,
                                      preload_page_count=preload_page_count,
                                      max_page_cache_size=max_page_cache_size).validate()
        self.provider = provider
        self.log = logger or log

        self._cache = PageCache(max_page_cache_size)
        self._current_page_number = page_number_starts_from
        self._state = PaginatorState.UNINITIALIZED
        self._tasks = TaskSet()
        self._init_task = None

        self._schedule_initialization()

    @classmethod
    def from_config(cls, provider, config: PaginatorConfig, *, logger=None):
        return cls(provider,
                   preload_page_count=config.preload_page_count,
                   max_page_cache_size=config.max_page_cache_size,
                   page_number_starts_from=config.page_number_starts_from,
                   logger=logger)

    @property
    def state(self):
        return self._state

    @property
    def ready(self):
        return self._state is PaginatorState.READY

    @property
    def start(self):
        return self.config.page_number_starts_from

    @property
    def current_page_number(self):
        return self._current_page_number

    @property
    def cached_page_numbers(self) -> List[int]:
        return self._cache.page_numbers()

    def cached_page(self, page_number) -> Optional[Page[T]]:
        """Look a page up in the cache without making it more recently used."""
        return self._cache.peek(page_number)

    def _schedule_initialization(self):
        self._state = PaginatorState.INITIALIZING
        self._init_task = self._tasks.create_task(self._initialize())

    def retry_initialization(self):
        """Start over if a previous initialization failed; no-op otherwise."""
        if self._state is PaginatorState.READY:
            return False
        if self._init_task is not None and not self._init_task.done():
            return False

        self.log.info("Retrying initialization from page %d", self.start)
        self._schedule_initialization()
        return True

    async def _initialize(self):
        result = await fetch_result(self.provider, self.start)

        match result.status:
            case FetchStatus.ERROR:
                self._log_fetch_error(self.start, result.error)
            case FetchStatus.EMPTY:
                self._state = PaginatorState.READY
                self.log.info("No data available at all")
            case FetchStatus.OK:
                self._state = PaginatorState.READY
                self._save(self.start, result.page)

                # First page is already cached, start with the next one.
                await self._preload(self.start + 1)

    async def _preload(self, first):
        last = self.start + self.config.preload_page_count

        for page_number in range(first, last + 1):
            if self._cache.get(page_number) is not None:
                continue

            if not self.provider.can_fetch_page(page_number):
                break

            # A full cache would have to give up the current page.
            if self._cache.enabled and len(self._cache) >= self._cache.max_size:
                break

            result = await fetch_result(self.provider, page_number)

            match result.status:
                case FetchStatus.OK:
                    self._save(page_number, result.page)
                case FetchStatus.EMPTY:
                    self.log.info("No data available for page %d", page_number)
                    return
                case FetchStatus.ERROR:
                    # Not fatal; carry on with the rest of the chain.
                    self._log_fetch_error(page_number, result.error)

        self.log.info("Preloaded the pages")

    def get_current_page(self, callback: PageCallback):
        self._resolve_adjacent(self._current_page_number, self._current_page_number, callback)

    def get_next_page(self, callback: PageCallback):
        self._resolve_adjacent(self._current_page_number, self._current_page_number + 1, callback)

    def get_previous_page(self, callback: PageCallback):
        self._resolve_adjacent(self._current_page_number, self._current_page_number - 1, callback)

    def _resolve_adjacent(self, from_page_number, page_number, callback):
        if not self.ready:
            self.log.debug("Ignoring request for page %d before initialization", page_number)
            return

        if page_number < self.start:
            self.log.info("No previous page when at the first page")
            return self._deliver(callback, None)

        if not self.provider.can_fetch_page(page_number):
            self.log.info("No page available for page number %d", page_number)
            return self._deliver(callback, None)

        if self._cache.get(from_page_number) is None:
            error = InternalConsistencyError(f"Current page {from_page_number} is not cached")
            self.log.error("%s", error)
            return self._deliver(callback, None)

        if (page := self._cache.get(page_number)) is not None:
            self._current_page_number = page_number
            return self._deliver(callback, page)

        # Move ahead before the fetch resolves, so that follow-up requests
        # navigate relative to where the caller is headed.
        self._current_page_number = page_number
        self._tasks.create_task(self._fetch_and_save(from_page_number, page_number, callback))

    async def _fetch_and_save(self, from_page_number, page_number, callback):
        if not self.provider.can_fetch_page(page_number):
            self._rollback(from_page_number, page_number)
            return self._deliver_late(callback, None)

        self.log.debug("Fetching page %d", page_number)
        result = await fetch_result(self.provider, page_number)

        match result.status:
            case FetchStatus.OK:
                self._save(page_number, result.page)
                self._deliver_late(callback, result.page)
            case FetchStatus.EMPTY:
                self.log.info("No data available for page %d", page_number)
                self._rollback(from_page_number, page_number)
                self._deliver_late(callback, None)
            case FetchStatus.ERROR:
                self._log_fetch_error(page_number, result.error)
                self._rollback(from_page_number, page_number)
                self._deliver_late(callback, None)

    def _rollback(self, from_page_number, page_number):
        # Only undo our own move; a newer request may have moved on already.
        if self._current_page_number == page_number:
            self._current_page_number = from_page_number

    def _save(self, page_number, page):
        if (evicted := self._cache.put(page_number, page)) is not None:
            self.log.debug("Evicted page %d from cache", evicted)

    @staticmethod
    def _deliver(callback, page):
        if callback is not None:
            callback(page)

    def _deliver_late(self, callback, page):
        try:
            self._deliver(callback, page)
        except Exception:
            self.log.exception("Page callback raised")

    def _log_fetch_error(self, page_number, error):
        self.log.error("Caught an exception while fetching page %d: %s", page_number, error,
                       exc_info=error)

    async def join(self):
        """Wait for initialization, preloading and in-flight fetches."""
        await self._tasks.join()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.join()

    def __repr__(self):
        return (f'<Paginator state={self._state.value} current={self._current_page_number} '
                f'cached={self.cached_page_numbers} pending={len(self._tasks)}>')
