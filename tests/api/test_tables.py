import pytest

from roster_api.models import User
from roster_api.seed.seed_data import seed


def add_employee(client, headers, **fields):
    payload = {"first_name": "John", "last_name": "Doe", "email": "john@acme.com", **fields}
    response = client.post("/tables/employees", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_list_update_delete_employee(client, admin_headers):
    created = add_employee(client, admin_headers, department="hr", employee_code="E1")
    assert created["status"] == "active"

    rows = client.get("/tables/employees", headers=admin_headers).json()
    assert [row["id"] for row in rows] == [created["id"]]

    updated = client.patch(
        f"/tables/employees/{created['id']}", json={"status": "on_leave"}, headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "on_leave"
    assert client.get(f"/tables/employees/{created['id']}", headers=admin_headers).json()["status"] == "on_leave"

    deleted = client.delete(f"/tables/employees/{created['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    assert client.get("/tables/employees", headers=admin_headers).json() == []

    again = client.delete(f"/tables/employees/{created['id']}", headers=admin_headers)
    assert again.status_code == 404


def test_employee_mutations_are_audited(client, admin_headers):
    created = add_employee(client, admin_headers, department="finance")
    client.patch(f"/tables/employees/{created['id']}", json={"position": "Analyst"}, headers=admin_headers)
    client.delete(f"/tables/employees/{created['id']}", headers=admin_headers)

    events = client.get("/tables/audit_events", headers=admin_headers).json()

    assert [event["action"] for event in events] == ["record_created", "record_updated", "record_deleted"]
    assert events[1]["details"]["fields"] == ["position"]
    assert events[0]["user_email"] == "admin@acme.com"
    assert events[0]["department"] == "finance"

    stats = client.get("/tables/audit_events/stats", headers=admin_headers).json()
    assert stats["total"] == 3
    assert stats["by_action"]["record_deleted"] == 1
    assert stats["departments"] == ["finance"]
    assert len(stats["users"]) == 1


def test_rows_are_isolated_per_tenant(client, register, admin_headers):
    add_employee(client, admin_headers)
    other_token = register("boss@globex.com", tenant_id="globex")
    other_headers = {"Authorization": f"Bearer {other_token}"}

    assert client.get("/tables/employees", headers=other_headers).json() == []
    acme_id = client.get("/tables/employees", headers=admin_headers).json()[0]["id"]
    assert client.delete(f"/tables/employees/{acme_id}", headers=other_headers).status_code == 404


def test_invalid_payloads_are_rejected(client, admin_headers):
    missing = client.post("/tables/employees", json={"first_name": "A"}, headers=admin_headers)
    assert missing.status_code == 422

    bad_status = client.post(
        "/tables/employees",
        json={"first_name": "A", "last_name": "B", "email": "a@b.c", "status": "retired"},
        headers=admin_headers,
    )
    assert bad_status.status_code == 422

    created = add_employee(client, admin_headers)
    nulled = client.patch(f"/tables/employees/{created['id']}", json={"first_name": None}, headers=admin_headers)
    assert nulled.status_code == 422

    assert client.get("/tables/unknown", headers=admin_headers).status_code == 404
    assert client.get("/tables/employees?order_by=tenant_id", headers=admin_headers).status_code == 400


def test_order_by_column_descending(client, admin_headers):
    for name in ("Ann", "Cid", "Bea"):
        add_employee(client, admin_headers, first_name=name)

    rows = client.get("/tables/employees?order_by=-first_name", headers=admin_headers).json()

    assert [row["first_name"] for row in rows] == ["Cid", "Bea", "Ann"]


@pytest.fixture
def seeded_headers(client, db_session, login):
    admin = seed(db_session, tenant_id="acme", employees=23)
    return {"Authorization": f"Bearer {login(admin.email, 'changeme123')}"}


def test_server_side_view_clamps_page(client, seeded_headers):
    response = client.get("/tables/employees/view?page=5&page_size=10", headers=seeded_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 23
    assert body["page_count"] == 3
    assert body["page"] == 3
    assert len(body["items"]) == 3


def test_server_side_view_filters(client, seeded_headers):
    by_department = client.get("/tables/employees/view?department=hr&page_size=50", headers=seeded_headers).json()
    assert by_department["total"] == 6
    assert {item["department"] for item in by_department["items"]} == {"hr"}

    terminated = client.get("/tables/employees/view?status=terminated", headers=seeded_headers).json()
    assert terminated["total"] == 2

    searched = client.get("/tables/employees/view?search=person2", headers=seeded_headers).json()
    # Person2 and Person20..Person23
    assert searched["total"] == 5

    payroll = client.get("/tables/payroll_employees/view?pay_group_id=weekly&page_size=50", headers=seeded_headers).json()
    assert payroll["total"] == 12
    assert payroll["items"][0]["rate"] in (25.0, 2400.0)


def test_server_side_view_validates_paging(client, seeded_headers):
    assert client.get("/tables/employees/view?page_size=25", headers=seeded_headers).status_code == 422
    assert client.get("/tables/employees/view?page=0", headers=seeded_headers).status_code == 422
    assert client.get("/tables/employees/view?sort_by=nope", headers=seeded_headers).status_code == 400


def test_seed_creates_admin(db_session):
    admin = seed(db_session, tenant_id="initech", employees=2)

    assert db_session.get(User, admin.id).role == "admin"


def test_only_admins_delete_rows(client, register, admin_headers):
    created = add_employee(client, admin_headers)
    viewer_token = register("viewer@acme.com", token=admin_headers["Authorization"].split()[1])
    viewer_headers = {"Authorization": f"Bearer {viewer_token}"}

    assert client.delete(f"/tables/employees/{created['id']}", headers=viewer_headers).status_code == 403
    assert client.get(f"/tables/employees/{created['id']}", headers=viewer_headers).status_code == 200


def test_rows_without_a_value_sort_last(client, admin_headers):
    add_employee(client, admin_headers, first_name="Ann", position="Clerk")
    add_employee(client, admin_headers, first_name="Bob")
    add_employee(client, admin_headers, first_name="Cid", position="Analyst")

    descending = client.get("/tables/employees?order_by=-position", headers=admin_headers).json()
    ascending = client.get("/tables/employees?order_by=position", headers=admin_headers).json()

    assert [row["first_name"] for row in descending] == ["Ann", "Cid", "Bob"]
    assert [row["first_name"] for row in ascending] == ["Cid", "Ann", "Bob"]
