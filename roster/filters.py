from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from .models import ALL, CollectionProfile, FilterState, Item


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def matches_search(item: Item, search_fields: Iterable[str], search_term: str) -> bool:
    """Case-insensitive substring match against the joined searchable fields."""

    term = (search_term or "").strip().lower()
    if not term:
        return True
    haystack = " ".join(_text(item.get(name)) for name in search_fields).lower()
    return term in haystack


def matches_value(item: Item, field_name: str, wanted: str | None) -> bool:
    if wanted is None or wanted == ALL:
        return True
    return _text(item.get(field_name)) == _text(wanted)


def matches_facets(item: Item, facets: Mapping[str, str]) -> bool:
    return all(matches_value(item, name, wanted) for name, wanted in facets.items())


def filter_items(items: Iterable[Item], profile: CollectionProfile, state: FilterState) -> List[Item]:
    """Filter items by search term, status and facet filters, keeping fetch order."""

    def matches(item: Item) -> bool:
        if not matches_search(item, profile.search_fields, state.search_term):
            return False
        if not matches_value(item, profile.status_field, state.status_filter):
            return False
        if not matches_facets(item, state.facets):
            return False
        return True

    return [item for item in items if matches(item)]


def distinct_values(items: Iterable[Item], field_name: str) -> List[str]:
    """Options for a filter dropdown, in first-seen order, skipping blanks."""

    seen: List[str] = []
    for item in items:
        value = item.get(field_name)
        if value in (None, ""):
            continue
        if value not in seen:
            seen.append(value)
    return seen
