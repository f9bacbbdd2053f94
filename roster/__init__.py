from .dispatcher import BulkResult, RowActionDispatcher
from .errors import (
    ActionRejected,
    AuthFailure,
    MutationConflict,
    NetworkFailure,
    RosterError,
    StaleResponse,
    ValidationError,
)
from .fetcher import CollectionFetcher
from .models import ALL, PAGE_SIZES, CollectionProfile, FilterState, Notice, ScreenStatus, TenantScope, ViewPage
from .screen import ListScreen
from .selection import SelectionSet
from .sources import DataSource, MemoryDataSource
from .state import FilterStateHolder
from .uploads import RULES, UploadGuard, UploadRule
from .view import build_view

__all__ = [
    "ALL",
    "PAGE_SIZES",
    "ActionRejected",
    "AuthFailure",
    "BulkResult",
    "CollectionFetcher",
    "CollectionProfile",
    "DataSource",
    "FilterState",
    "FilterStateHolder",
    "ListScreen",
    "MemoryDataSource",
    "MutationConflict",
    "NetworkFailure",
    "Notice",
    "RULES",
    "RosterError",
    "RowActionDispatcher",
    "ScreenStatus",
    "SelectionSet",
    "StaleResponse",
    "TenantScope",
    "UploadGuard",
    "UploadRule",
    "ValidationError",
    "ViewPage",
    "build_view",
]
