from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import structlog

from .errors import AuthFailure, RosterError
from .models import Item, Notice
from .screen import ListScreen

logger = structlog.get_logger(__name__)

Confirm = Callable[[str], bool]
Navigate = Callable[[str, Any], None]


@dataclass
class BulkResult:
    deleted: List[Any] = field(default_factory=list)
    failed: Dict[Any, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def _never_navigate(intent: str, item_id: Any) -> None:
    logger.debug("navigation_ignored", intent=intent, item_id=item_id)


class RowActionDispatcher:
    """Routes per-row intents of a list screen to navigation and mutations.

    Destructive actions ask ``confirm`` first and do nothing unless it
    returns ``True``.
    """

    def __init__(self, screen: ListScreen, confirm: Confirm, navigate: Optional[Navigate] = None):
        self.screen = screen
        self.confirm = confirm
        self.navigate = navigate or _never_navigate

    @property
    def table(self) -> str:
        return self.screen.profile.name

    def on_select(self, item_id: Any, selected: bool) -> bool:
        """Toggle one row; ids missing from the loaded collection are ignored."""

        self.screen.ensure_idle()
        if selected and self.screen.find(item_id) is None:
            logger.warning("row_select_unknown", table=self.table, item_id=item_id)
            return False
        self.screen.selection.select(item_id, selected)
        return True

    def on_select_all(self, selected: bool) -> None:
        self.screen.ensure_idle()
        self.screen.selection.select_all(self.screen.visible_ids, selected)

    def on_view(self, item_id: Any) -> None:
        self.screen.ensure_idle()
        self.navigate("view", item_id)

    def on_edit(self, item_id: Any) -> None:
        self.screen.ensure_idle()
        self.navigate("edit", item_id)

    def on_create(self, record: Item) -> bool:
        scope = self.screen.scope
        return self.screen.mutate(
            "create",
            lambda: self.screen.source.insert(self.table, scope, record),
            success_message="Record created",
        )

    def on_update(self, item_id: Any, patch: Item) -> bool:
        scope = self.screen.scope
        return self.screen.mutate(
            "update",
            lambda: self.screen.source.update(self.table, scope, item_id, patch),
            success_message="Record updated",
        )

    def on_delete(self, item_id: Any) -> bool:
        self.screen.ensure_idle()
        if not self.confirm(f"Delete this record from {self.table}? This cannot be undone."):
            logger.info("row_delete_cancelled", table=self.table, item_id=item_id)
            return False
        scope = self.screen.scope
        deleted = self.screen.mutate(
            "delete",
            lambda: self.screen.source.delete(self.table, scope, item_id),
            success_message="Record deleted",
        )
        if deleted:
            logger.info("row_deleted", table=self.table, item_id=item_id)
        return deleted

    def on_bulk_delete(self) -> BulkResult:
        """Delete every selected id after a single confirmation."""

        self.screen.ensure_idle()
        ids = sorted(self.screen.selection.ids, key=str)
        result = BulkResult()
        if not ids:
            return result
        if not self.confirm(f"Delete {len(ids)} selected records from {self.table}?"):
            return result

        scope = self.screen.scope

        def delete_selected() -> None:
            for item_id in ids:
                try:
                    self.screen.source.delete(self.table, scope, item_id)
                except AuthFailure:
                    raise
                except RosterError as exc:
                    result.failed[item_id] = exc.message
                else:
                    result.deleted.append(item_id)

        self.screen.mutate("bulk_delete", delete_selected)
        if result.failed:
            self.screen.notify(
                Notice("error", "Some records were not deleted", f"{len(result.failed)} of {len(ids)} failed")
            )
        elif result.deleted:
            self.screen.notify(Notice("success", "Deleted", f"{len(result.deleted)} records deleted"))
        return result
