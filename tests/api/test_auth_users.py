from datetime import timedelta

from roster_api.db.session import utcnow
from roster_api.models import AuthSession

PASSWORD = "supersecure"


def test_health_and_root(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["message"] == "Roster API running"


def test_first_user_bootstraps_tenant_as_admin(client):
    response = client.post(
        "/users",
        json={"email": "owner@acme.com", "password": PASSWORD, "role": "viewer", "tenant_id": "acme"},
    )

    assert response.status_code == 201
    created = response.json()
    assert created["role"] == "admin"
    assert created["tenant_id"] == "acme"
    assert created["id"] > 0


def test_joining_existing_tenant_requires_admin(client, register):
    admin_token = register("admin@acme.com")

    anonymous = client.post(
        "/users",
        json={"email": "intruder@acme.com", "password": PASSWORD, "tenant_id": "acme"},
    )
    assert anonymous.status_code == 401

    register("viewer@acme.com", token=admin_token)
    users = client.get("/users", headers={"Authorization": f"Bearer {admin_token}"}).json()
    assert sorted(user["email"] for user in users) == ["admin@acme.com", "viewer@acme.com"]


def test_duplicate_email_rejected(client, register):
    register("dup@acme.com")

    second = client.post(
        "/users",
        json={"email": "dup@acme.com", "password": PASSWORD, "tenant_id": "other"},
    )

    assert second.status_code == 400
    assert second.json()["detail"] == "User already exists"


def test_login_rejects_bad_credentials(client, register):
    register("admin@acme.com")

    response = client.post("/auth/login", json={"email": "admin@acme.com", "password": "wrongpassword"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_tables_require_a_live_session(client, register, db_session):
    token = register("admin@acme.com")
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/tables/employees").status_code == 401
    assert client.get("/tables/employees", headers={"Authorization": "Bearer nope"}).status_code == 401
    assert client.get("/tables/employees", headers={**headers, "X-Tenant-ID": "globex"}).status_code == 403
    assert client.get("/tables/employees", headers=headers).status_code == 200

    session = db_session.get(AuthSession, token)
    session.expires_at = utcnow() - timedelta(minutes=1)
    db_session.commit()
    assert client.get("/tables/employees", headers=headers).status_code == 401


def test_logout_revokes_token(client, register, login):
    token = register("admin@acme.com")
    headers = {"Authorization": f"Bearer {token}"}

    assert client.post("/auth/logout", headers=headers).status_code == 204

    assert client.get("/tables/employees", headers=headers).status_code == 401
    assert login("admin@acme.com")
