"""Pagination boundary shared by every listing.

Listings materialize the matching rows, order them in Python with a stable
identity tie-break, then slice out the requested page.
"""

import math
from dataclasses import dataclass, field
from operator import attrgetter

from protean.exceptions import ValidationError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size and an optional sort key (``-`` for descending)."""

    index: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: str | None = None

    def __post_init__(self):
        if self.index < 0:
            raise ValidationError({"page": ["Page index cannot be negative"]})
        if not 1 <= self.size <= MAX_PAGE_SIZE:
            raise ValidationError({"size": [f"Page size must be between 1 and {MAX_PAGE_SIZE}"]})

    @property
    def offset(self) -> int:
        return self.index * self.size


@dataclass(frozen=True)
class Page:
    """One page of results plus the totals a client needs to navigate."""

    items: list = field(default_factory=list)
    index: int = 0
    size: int = DEFAULT_PAGE_SIZE
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.total_elements else 0

    @property
    def is_last(self) -> bool:
        return self.index >= self.total_pages - 1

    @classmethod
    def slice(cls, items, request: PageRequest) -> "Page":
        items = list(items)
        return cls(
            items=items[request.offset : request.offset + request.size],
            index=request.index,
            size=request.size,
            total_elements=len(items),
        )


def order_items(items, sort: str | None, allowed: set[str], default: str, identity: str):
    """Sort ``items`` by a whitelisted attribute, breaking ties on ``identity`` ascending."""
    sort = sort or default
    descending = sort.startswith("-")
    key = sort.lstrip("-")
    if key not in allowed:
        raise ValidationError({"sort": [f"Cannot sort by `{key}`. Allowed: {', '.join(sorted(allowed))}"]})

    # Stable sorts: identity first, then the requested key
    ordered = sorted(items, key=lambda item: str(getattr(item, identity)))
    return sorted(ordered, key=attrgetter(key), reverse=descending)


def fetch_all(queryset) -> list:
    """Evaluate a queryset in full rather than stopping at its default limit."""
    total = queryset.all().total
    if not total:
        return []
    return list(queryset.limit(total).all().items)
