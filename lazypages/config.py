from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class PaginatorConfig:
    page_number_starts_from: int = 0
    preload_page_count: int = 0
    # Caching (and thus eviction) is only enabled for values greater than one.
    max_page_cache_size: int = 0

    @property
    def caching(self):
        return self.max_page_cache_size > 1

    def validate(self):
        if self.preload_page_count < 0:
            raise ConfigurationError(f"Preload page count can't be negative ({self.preload_page_count})")
        if self.max_page_cache_size < 0:
            raise ConfigurationError(f"Max page cache size can't be negative ({self.max_page_cache_size})")

        if self.caching and self.preload_page_count > self.max_page_cache_size:
            raise ConfigurationError(
                f"Preload page count ({self.preload_page_count}) cannot be greater than "
                f"max page cache size ({self.max_page_cache_size})")

        return self
