from .audit_event import AuditEvent
from .auth_session import AuthSession
from .employee import Employee
from .payroll_employee import PayrollEmployee
from .stored_object import StoredObject
from .tenant import Tenant
from .user import User

__all__ = ["Tenant", "User", "AuthSession", "Employee", "PayrollEmployee", "AuditEvent", "StoredObject"]
