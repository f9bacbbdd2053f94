import os

os.environ.setdefault("ROSTER_DATABASE_URL", "sqlite://")
os.environ.setdefault("ROSTER_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roster_api.db.session import Base, get_session
from roster_api.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_session] = override_get_session

PASSWORD = "supersecure"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _login(client, email, password=PASSWORD):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def login(client):
    return lambda email, password=PASSWORD: _login(client, email, password)


@pytest.fixture
def register(client):
    def _register(email, tenant_id="acme", role="viewer", token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = client.post(
            "/users",
            json={"email": email, "password": PASSWORD, "role": role, "tenant_id": tenant_id},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return _login(client, email)

    return _register


@pytest.fixture
def admin_headers(register):
    token = register("admin@acme.com")
    return {"Authorization": f"Bearer {token}"}
