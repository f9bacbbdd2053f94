from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from .filters import distinct_values
from .models import Item


@dataclass
class RosterStats:
    total: int
    active: int
    departments: int
    added_this_month: int


@dataclass
class AuditStats:
    total: int
    by_action: Dict[str, int] = field(default_factory=dict)
    users: List[Dict[str, Any]] = field(default_factory=list)
    departments: List[str] = field(default_factory=list)


def parse_iso_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(text.split("T")[0])
        except ValueError:
            return None


def roster_stats(items: Iterable[Item], today: date | None = None) -> RosterStats:
    rows = list(items)
    today = today or date.today()

    def added_this_month(row: Item) -> bool:
        created = parse_iso_date(row.get("created_at"))
        return created is not None and (created.year, created.month) == (today.year, today.month)

    return RosterStats(
        total=len(rows),
        active=sum(1 for row in rows if row.get("status") == "active"),
        departments=len(distinct_values(rows, "department")),
        added_this_month=sum(1 for row in rows if added_this_month(row)),
    )


def audit_stats(events: Iterable[Item]) -> AuditStats:
    rows = list(events)
    by_action: Dict[str, int] = defaultdict(int)
    users: List[Dict[str, Any]] = []
    seen_users = set()
    for row in rows:
        if row.get("action"):
            by_action[row["action"]] += 1
        user_id = row.get("user_id")
        if user_id in seen_users:
            continue
        seen_users.add(user_id)
        users.append({"id": user_id, "name": row.get("user_name")})

    return AuditStats(
        total=len(rows),
        by_action=dict(by_action),
        users=users,
        departments=distinct_values(rows, "department"),
    )
