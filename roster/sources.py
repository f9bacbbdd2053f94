from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol
from uuid import uuid4

from .errors import MutationConflict
from .models import Item, TenantScope
from .view import sort_items


class DataSource(Protocol):
    """Capability calls the list screens make against the managed backend."""

    def query(self, table: str, scope: TenantScope, order_by: Optional[str] = None) -> List[Item]: ...

    def insert(self, table: str, scope: TenantScope, record: Item) -> Item: ...

    def update(self, table: str, scope: TenantScope, item_id: Any, patch: Item) -> Item: ...

    def delete(self, table: str, scope: TenantScope, item_id: Any) -> None: ...

    def upload(self, bucket: str, path: str, content: bytes, content_type: str, scope: TenantScope) -> str: ...


class MemoryDataSource:
    """Tenant-partitioned tables held in process, in insertion order."""

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[str, Dict[Any, Item]]] = {}
        self.objects: Dict[str, bytes] = {}

    def _rows(self, table: str, scope: TenantScope) -> Dict[Any, Item]:
        return self.tables.setdefault(table, {}).setdefault(scope.tenant_id, {})

    def seed(self, table: str, scope: TenantScope, rows: List[Item]) -> None:
        for row in rows:
            self.insert(table, scope, row)

    def query(self, table: str, scope: TenantScope, order_by: Optional[str] = None) -> List[Item]:
        rows = [copy.deepcopy(row) for row in self._rows(table, scope).values()]
        if order_by:
            rows = sort_items(rows, order_by.lstrip("-"), descending=order_by.startswith("-"))
        return rows

    def insert(self, table: str, scope: TenantScope, record: Item) -> Item:
        row = dict(record)
        row.setdefault("id", str(uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        row["tenant_id"] = scope.tenant_id
        self._rows(table, scope)[row["id"]] = row
        return copy.deepcopy(row)

    def update(self, table: str, scope: TenantScope, item_id: Any, patch: Item) -> Item:
        rows = self._rows(table, scope)
        if item_id not in rows:
            raise MutationConflict(f"{table} row {item_id} not found", table=table, item_id=item_id)
        rows[item_id].update({k: v for k, v in patch.items() if k not in ("id", "tenant_id")})
        return copy.deepcopy(rows[item_id])

    def delete(self, table: str, scope: TenantScope, item_id: Any) -> None:
        rows = self._rows(table, scope)
        if item_id not in rows:
            raise MutationConflict(f"{table} row {item_id} not found", table=table, item_id=item_id)
        del rows[item_id]

    def upload(self, bucket: str, path: str, content: bytes, content_type: str, scope: TenantScope) -> str:
        key = f"{scope.tenant_id}/{bucket}/{path}"
        self.objects[key] = content
        return f"{bucket}/{path}"
