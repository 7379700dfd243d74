class PaginationError(Exception):
    pass


class ConfigurationError(PaginationError, ValueError):
    pass


class ProviderFetchError(PaginationError):
    def __init__(self, page_number, message=None):
        self.page_number = page_number

        super().__init__(message or f"Failed to fetch page {page_number}")


class InternalConsistencyError(PaginationError):
    pass


class HTTPError(PaginationError):
    pass
