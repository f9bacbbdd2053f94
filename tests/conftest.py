import pytest

from roster.models import TenantScope
from roster.sources import MemoryDataSource

DEPARTMENTS = ["hr", "finance", "sales"]


def _employees(count: int, **overrides):
    return [
        {
            "id": f"emp-{index}",
            "first_name": f"Person{index}",
            "last_name": "Example",
            "email": f"person{index}@example.com",
            "department": DEPARTMENTS[index % len(DEPARTMENTS)],
            "status": "active",
            "created_at": f"2024-01-01T00:{index // 60:02d}:{index % 60:02d}",
            **overrides,
        }
        for index in range(count)
    ]


@pytest.fixture
def make_employees():
    return _employees


@pytest.fixture
def scope():
    return TenantScope(tenant_id="acme", user_id="1", role="admin")


@pytest.fixture
def source(scope):
    store = MemoryDataSource()
    store.seed("employees", scope, _employees(23))
    return store
