from __future__ import annotations

from dataclasses import replace

from .errors import ValidationError
from .models import ALL, DEFAULT_PAGE_SIZE, PAGE_SIZES, FilterState
from .signals import Signal
from .view import clamp_page


class FilterStateHolder:
    """Owns the search, status, facet and pagination state of one list screen.

    Every filter or page-size change resets to the first page. ``changed``
    fires with a copy of the new state whenever something actually changed.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, facets: tuple[str, ...] = ()):
        self._check_page_size(page_size)
        self._state = FilterState(page_size=page_size, facets={name: ALL for name in facets})
        self._page_count = 1
        self.changed = Signal("filters_changed")

    @property
    def state(self) -> FilterState:
        return replace(self._state, facets=dict(self._state.facets))

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def page_count(self) -> int:
        return self._page_count

    def set_search_term(self, term: str) -> None:
        self._update(search_term=term or "", page=1)

    def set_status_filter(self, status: str | None) -> None:
        self._update(status_filter=status or ALL, page=1)

    def set_facet(self, name: str, value: str | None) -> None:
        facets = dict(self._state.facets)
        facets[name] = value or ALL
        self._update(facets=facets, page=1)

    def set_page_size(self, page_size: int) -> None:
        self._check_page_size(page_size)
        self._update(page_size=page_size, page=1)

    def set_sort(self, sort_by: str | None, descending: bool = False) -> None:
        self._update(sort_by=sort_by, descending=descending, page=1)

    def set_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range requests are ignored."""

        if page < 1 or page > self._page_count:
            return False
        self._update(page=page)
        return True

    def next_page(self) -> bool:
        return self.set_page(self._state.page + 1)

    def previous_page(self) -> bool:
        return self.set_page(self._state.page - 1)

    def update_page_count(self, page_count: int) -> None:
        """Record the page count of the latest view and re-clamp the cursor."""

        self._page_count = max(page_count, 1)
        clamped = clamp_page(self._state.page, self._page_count)
        if clamped != self._state.page:
            self._update(page=clamped)

    def reset(self) -> None:
        facets = {name: ALL for name in self._state.facets}
        self._update(search_term="", status_filter=ALL, facets=facets, page=1, sort_by=None, descending=False)

    def _update(self, **changes) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        self.changed.emit(self.state)

    @staticmethod
    def _check_page_size(page_size: int) -> None:
        if page_size not in PAGE_SIZES:
            raise ValidationError(
                f"Page size must be one of {', '.join(str(size) for size in PAGE_SIZES)}",
                field="page_size",
            )
