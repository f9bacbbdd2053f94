"""List-screen state machine.

A screen moves ``LOADING -> READY``, bounces through ``FILTERING`` whenever
the filter state changes, and goes ``MUTATING -> LOADING -> READY`` around
every create/update/delete it dispatches. A ``NetworkFailure`` leaves it in
``ERROR`` with a retry affordance; an ``AuthFailure`` is re-raised so the
caller can send the user back to the login page.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import structlog

from .errors import ActionRejected, AuthFailure, NetworkFailure, RosterError, StaleResponse
from .fetcher import CollectionFetcher
from .models import DEFAULT_PAGE_SIZE, Item, Notice, ScreenStatus, TenantScope, ViewPage
from .selection import SelectionSet
from .signals import Signal
from .state import FilterStateHolder
from .view import build_view

logger = structlog.get_logger(__name__)

BUSY_STATES = (ScreenStatus.LOADING, ScreenStatus.MUTATING)


class ListScreen:
    def __init__(
        self,
        fetcher: CollectionFetcher,
        scope: TenantScope,
        page_size: int = DEFAULT_PAGE_SIZE,
        notifier: Optional[Callable[[Notice], None]] = None,
    ):
        self.fetcher = fetcher
        self.profile = fetcher.profile
        self.scope = scope
        self.filters = FilterStateHolder(page_size=page_size, facets=self.profile.facet_fields)
        self.selection = SelectionSet()
        self.items: List[Item] = []
        self.error: Optional[RosterError] = None
        self.status = ScreenStatus.LOADING
        self.view: ViewPage = build_view([], self.profile, self.filters.state)

        self.status_changed = Signal("status_changed")
        self.view_changed = Signal("view_changed")
        self.notices = Signal("notices")
        if notifier is not None:
            self.notices.connect(notifier)

        self._refreshing = False
        self.filters.changed.connect(self._on_filters_changed)

    @property
    def source(self):
        return self.fetcher.source

    @property
    def busy(self) -> bool:
        return self.status in BUSY_STATES

    @property
    def visible_ids(self) -> List[Any]:
        return [self.profile.item_id(item) for item in self.view.visible]

    def find(self, item_id: Any) -> Optional[Item]:
        for item in self.items:
            if self.profile.item_id(item) == item_id:
                return item
        return None

    def load(self) -> ViewPage:
        """Fetch the collection and derive the visible page from it."""

        previous = self.status
        self._set_status(ScreenStatus.LOADING)
        try:
            rows = self.fetcher.fetch(self.scope)
        except StaleResponse:
            # A newer fetch owns the rows; only give the status back.
            self._set_status(ScreenStatus.READY if previous in BUSY_STATES else previous)
            return self.view
        except AuthFailure as exc:
            self.error = exc
            self._set_status(ScreenStatus.ERROR)
            self.notify(Notice("error", exc.title, exc.message))
            raise
        except RosterError as exc:
            self.error = exc
            self._set_status(ScreenStatus.ERROR)
            self.notify(Notice("error", exc.title, exc.message, retryable=isinstance(exc, NetworkFailure)))
            return self.view

        self.error = None
        self.items = rows
        pruned = self.selection.prune(self.profile.item_id(row) for row in rows)
        if pruned:
            logger.info("selection_pruned", table=self.profile.name, ids=pruned)
        self.refresh()
        self._set_status(ScreenStatus.READY)
        return self.view

    def retry(self) -> ViewPage:
        return self.load()

    def refresh(self) -> ViewPage:
        """Re-derive the visible page from the rows already held."""

        if self._refreshing:
            return self.view
        self._refreshing = True
        try:
            self.view = build_view(self.items, self.profile, self.filters.state)
            self.filters.update_page_count(self.view.page_count)
        finally:
            self._refreshing = False
        self.view_changed.emit(self.view)
        return self.view

    def mutate(self, action: str, operation: Callable[[], Any], success_message: str = "") -> bool:
        """Run one mutation against the data source, then re-fetch.

        Returns ``True`` when the mutation succeeded. Failures other than
        ``AuthFailure`` become an error notice and leave the screen usable.
        """

        self.ensure_idle()
        self._set_status(ScreenStatus.MUTATING)
        log = logger.bind(table=self.profile.name, tenant_id=self.scope.tenant_id, action=action)
        try:
            operation()
        except AuthFailure as exc:
            self.error = exc
            self._set_status(ScreenStatus.ERROR)
            self.notify(Notice("error", exc.title, exc.message))
            raise
        except RosterError as exc:
            log.warning("mutation_failed", error=exc.message, kind=type(exc).__name__)
            self._set_status(ScreenStatus.READY)
            self.notify(Notice("error", exc.title, exc.message, retryable=isinstance(exc, NetworkFailure)))
            return False
        except Exception:
            self._set_status(ScreenStatus.READY)
            raise

        log.info("mutation_succeeded")
        if success_message:
            self.notify(Notice("success", "Saved", success_message))
        self.load()
        return True

    def ensure_idle(self) -> None:
        if self.busy:
            raise ActionRejected(f"{self.profile.name} is {self.status.value}; try again shortly")

    def notify(self, notice: Notice) -> None:
        self.notices.emit(notice)

    def _on_filters_changed(self, _state) -> None:
        if self.status == ScreenStatus.READY:
            self._set_status(ScreenStatus.FILTERING)
            self.refresh()
            self._set_status(ScreenStatus.READY)
        else:
            self.refresh()

    def _set_status(self, status: ScreenStatus) -> None:
        if status == self.status:
            return
        previous = self.status
        self.status = status
        self.status_changed.emit(status, previous)
