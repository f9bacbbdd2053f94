from datetime import date, datetime

from roster.stats import audit_stats, parse_iso_date, roster_stats


def test_roster_stats_counts_active_departments_and_new_hires():
    rows = [
        {"status": "active", "department": "hr", "created_at": "2026-10-02T09:00:00Z"},
        {"status": "active", "department": "sales", "created_at": "2025-10-02T09:00:00"},
        {"status": "terminated", "department": "hr", "created_at": "2026-09-30"},
        {"status": "active", "department": None, "created_at": None},
    ]

    stats = roster_stats(rows, today=date(2026, 10, 18))

    assert stats.total == 4
    assert stats.active == 3
    assert stats.departments == 2
    assert stats.added_this_month == 1


def test_audit_stats_groups_actions_users_and_departments():
    events = [
        {"user_id": "1", "user_name": "John Smith", "action": "signature_applied", "department": "hr"},
        {"user_id": "2", "user_name": "Sarah Johnson", "action": "signature_created", "department": "finance"},
        {"user_id": "1", "user_name": "John Smith", "action": "signature_applied", "department": "hr"},
    ]

    stats = audit_stats(events)

    assert stats.total == 3
    assert stats.by_action == {"signature_applied": 2, "signature_created": 1}
    assert stats.users == [{"id": "1", "name": "John Smith"}, {"id": "2", "name": "Sarah Johnson"}]
    assert stats.departments == ["hr", "finance"]


def test_parse_iso_date_accepts_common_shapes():
    assert parse_iso_date("2024-01-15T10:30:00Z") == date(2024, 1, 15)
    assert parse_iso_date(datetime(2024, 1, 15, 8)) == date(2024, 1, 15)
    assert parse_iso_date(date(2024, 1, 15)) == date(2024, 1, 15)
    assert parse_iso_date("not a date") is None
    assert parse_iso_date("") is None
