from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

ALL = "all"
PAGE_SIZES: Tuple[int, ...] = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10

Item = Dict[str, Any]


@dataclass(frozen=True)
class CollectionProfile:
    """Describes how one item type is searched and filtered."""

    name: str
    search_fields: Tuple[str, ...]
    status_field: str = "status"
    facet_fields: Tuple[str, ...] = ()
    id_field: str = "id"
    default_sort: Optional[str] = None

    def item_id(self, item: Item) -> Any:
        return item.get(self.id_field)


@dataclass
class FilterState:
    search_term: str = ""
    status_filter: str = ALL
    facets: Dict[str, str] = field(default_factory=dict)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: Optional[str] = None
    descending: bool = False

    def facet(self, name: str) -> str:
        return self.facets.get(name, ALL)


@dataclass
class ViewPage:
    visible: List[Item]
    total: int
    page: int
    page_count: int
    page_size: int
    start_index: int

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_empty(self) -> bool:
        return self.total == 0


@dataclass(frozen=True)
class TenantScope:
    """The tenant partition and the signed-in user every call is restricted to."""

    tenant_id: str
    user_id: Optional[str] = None
    role: str = "viewer"


class ScreenStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FILTERING = "filtering"
    MUTATING = "mutating"
    ERROR = "error"


@dataclass
class Notice:
    level: str  # info, success, error
    title: str
    message: str = ""
    retryable: bool = False
