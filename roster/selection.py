from __future__ import annotations

from typing import Any, Iterable, List, Set

from .signals import Signal


class SelectionSet:
    """Ids marked for a bulk action.

    "Select all" is page scoped: it only ever touches the ids that are
    visible on the current page, never the whole filtered collection.
    """

    def __init__(self) -> None:
        self._ids: Set[Any] = set()
        self.changed = Signal("selection_changed")

    def __contains__(self, item_id: Any) -> bool:
        return item_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset:
        return frozenset(self._ids)

    def select(self, item_id: Any, selected: bool) -> None:
        before = set(self._ids)
        if selected:
            self._ids.add(item_id)
        else:
            self._ids.discard(item_id)
        self._notify(before)

    def select_all(self, visible_ids: Iterable[Any], selected: bool) -> None:
        before = set(self._ids)
        page_ids = set(visible_ids)
        if selected:
            self._ids |= page_ids
        else:
            self._ids -= page_ids
        self._notify(before)

    def all_selected(self, visible_ids: Iterable[Any]) -> bool:
        page_ids = set(visible_ids)
        return bool(page_ids) and page_ids <= self._ids

    def prune(self, existing_ids: Iterable[Any]) -> List[Any]:
        """Drop ids no longer present in the unfiltered collection."""

        before = set(self._ids)
        stale = self._ids - set(existing_ids)
        self._ids -= stale
        self._notify(before)
        return sorted(stale, key=str)

    def clear(self) -> None:
        before = set(self._ids)
        self._ids.clear()
        self._notify(before)

    def _notify(self, before: Set[Any]) -> None:
        if before != self._ids:
            self.changed.emit(self.ids)
