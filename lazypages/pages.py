from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Page(Generic[T]):
    """Immutable snapshot of a single page of items."""
    page_number: int
    page_size: int
    items: Sequence[T] = field(default=())

    def __post_init__(self):
        # Copy, so that the caller's buffer can't mutate a cached page.
        object.__setattr__(self, 'items', tuple(self.items))

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __str__(self):
        items = ','.join(str(item) for item in self.items)
        return f'PageNumber: {self.page_number}, PageSize: {self.page_size}, Items: {items}'
