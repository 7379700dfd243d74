from .config import PaginatorConfig
from .exceptions import (
    PaginationError,
    ConfigurationError,
    ProviderFetchError,
    InternalConsistencyError,
    HTTPError
)
from .pages import Page
from .paginator import Paginator, PaginatorState
from .provider import PageProvider, FetchResult, FetchStatus, fetch_result

__all__ = [
    'Page',
    'PageProvider',
    'Paginator',
    'PaginatorConfig',
    'PaginatorState',
    'FetchResult',
    'FetchStatus',
    'fetch_result',
    'PaginationError',
    'ConfigurationError',
    'ProviderFetchError',
    'InternalConsistencyError',
    'HTTPError',
]
