"""Pure derivation of the visible slice of a collection.

``build_view`` never mutates its inputs and never talks to the data source,
so list screens and the service's server-side view share one implementation.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from .filters import filter_items
from .models import CollectionProfile, FilterState, Item, ViewPage


def page_count_for(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, -(-total // page_size))


def clamp_page(page: int, page_count: int) -> int:
    return min(max(page, 1), max(page_count, 1))


def _sort_value(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def sort_items(items: List[Item], sort_by: str | None, descending: bool = False) -> List[Item]:
    """Stable sort on one field; rows without a value go last in both directions."""
    if not sort_by:
        return items
    present = [item for item in items if item.get(sort_by) is not None]
    missing = [item for item in items if item.get(sort_by) is None]
    present.sort(key=lambda item: _sort_value(item[sort_by]), reverse=descending)
    return present + missing


def build_view(items: Iterable[Item], profile: CollectionProfile, state: FilterState) -> ViewPage:
    matched = filter_items(items, profile, state)
    matched = sort_items(matched, state.sort_by, state.descending)

    total = len(matched)
    page_count = page_count_for(total, state.page_size)
    page = clamp_page(state.page, page_count)
    start_index = (page - 1) * state.page_size

    return ViewPage(
        visible=matched[start_index : start_index + state.page_size],
        total=total,
        page=page,
        page_count=page_count,
        page_size=state.page_size,
        start_index=start_index,
    )
