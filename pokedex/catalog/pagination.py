"""
Offset/limit bookkeeping for the infinite-scroll list.

The remote API is page based (``page`` is 1-indexed, ``perPage`` items
per page) while the list grows by offset.  ``build_page_request``
translates an offset into the page to ask for; ``merge_page`` folds the
response into the ``ResultWindow``.  The API does not report a total,
so a short page is taken as the end of the data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .filters import FilterState
from .schemas import Pokemon


@dataclass(frozen=True)
class PageRequest:
    offset: int
    page: int
    per_page: int
    name: Optional[str] = None
    types: Optional[str] = None

    def params(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "per_page": self.per_page,
            "name": self.name,
            "types": self.types,
        }


@dataclass
class ResultWindow:
    """Items loaded for the active filters.

    ``offset`` always equals the number of items received since the
    last reset, i.e. ``len(items)``.
    """

    page_size: int
    items: List[Pokemon] = field(default_factory=list)
    offset: int = 0
    has_more: bool = True


def build_page_request(filters: FilterState, offset: int) -> PageRequest:
    if offset < 0:
        raise ValueError("offset must not be negative")
    page_size = filters.page_size
    return PageRequest(
        offset=offset,
        page=offset // page_size + 1,
        per_page=page_size,
        name=filters.name_param(),
        types=filters.types_param(),
    )


def merge_page(window: ResultWindow, request: PageRequest, items: Sequence[Pokemon]) -> ResultWindow:
    """Apply a page response to ``window`` in place and return it.

    Offset 0 replaces the items (first load or filter reset), any other
    offset appends them.  ``has_more`` is true only for a full page.
    """
    if request.offset == 0:
        window.items = list(items)
    else:
        window.items.extend(items)
    window.offset = request.offset + len(items)
    window.page_size = request.per_page
    window.has_more = len(items) == request.per_page
    return window
