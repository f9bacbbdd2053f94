from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from roster_api.core.logging import get_logger
from roster_api.db.session import init_db, session_scope
from roster_api.domains.auth.router import hash_password
from roster_api.models import AuditEvent, Employee, PayrollEmployee, Tenant, User

logger = get_logger(__name__)

DEPARTMENTS = ["hr", "finance", "operations", "sales"]


def seed(session: Session, tenant_id: str = "acme", employees: int = 23) -> User:
    tenant = Tenant(id=tenant_id, name=tenant_id.title())
    admin = User(
        tenant_id=tenant_id,
        email=f"admin@{tenant_id}.example.com",
        full_name="Admin User",
        hashed_password=hash_password("changeme123"),
        role="admin",
    )
    session.add_all([tenant, admin])
    session.flush()

    start = datetime(2024, 1, 1)
    for index in range(employees):
        department = DEPARTMENTS[index % len(DEPARTMENTS)]
        session.add(
            Employee(
                tenant_id=tenant_id,
                employee_code=f"E{index + 1:04d}",
                first_name=f"Person{index + 1}",
                last_name="Example",
                email=f"person{index + 1}@{tenant_id}.example.com",
                position="Associate",
                department=department,
                status="terminated" if index % 10 == 9 else "active",
                created_at=start + timedelta(days=index),
            )
        )
        session.add(
            PayrollEmployee(
                tenant_id=tenant_id,
                employee_code=f"E{index + 1:04d}",
                first_name=f"Person{index + 1}",
                last_name="Example",
                pay_group_id="biweekly" if index % 2 else "weekly",
                pay_type="hourly" if index % 3 == 0 else "salary",
                rate=25 if index % 3 == 0 else 2400,
                default_hours=80,
                hire_date=date(2020, 1, 1) + timedelta(days=30 * index),
                created_at=start + timedelta(days=index),
            )
        )

    session.add(
        AuditEvent(
            tenant_id=tenant_id,
            user_id=str(admin.id),
            user_name=admin.full_name,
            user_email=admin.email,
            action="template_locked",
            template_name="HR Employment Contract",
            department="hr",
            details={"reason": "Template finalized and approved by legal"},
            occurred_at=start,
        )
    )
    session.commit()
    return admin


def main(tenant_id: str = "acme") -> None:
    init_db()
    with session_scope() as session:
        if session.get(Tenant, tenant_id) is not None:
            logger.info("seed_skipped", tenant_id=tenant_id)
            return
        admin = seed(session, tenant_id=tenant_id)
        logger.info("seed_complete", tenant_id=tenant_id, admin_email=admin.email)


if __name__ == "__main__":
    main()
