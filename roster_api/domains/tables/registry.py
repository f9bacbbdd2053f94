from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Type

from pydantic import BaseModel

from roster.models import CollectionProfile
from roster.profiles import AUDIT_EVENTS, EMPLOYEES, PAYROLL_EMPLOYEES
from roster_api.db.session import Base
from roster_api.models import AuditEvent, Employee, PayrollEmployee

from . import schemas


@dataclass(frozen=True)
class TableSpec:
    model: Type[Base]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    out_schema: Type[BaseModel]
    profile: CollectionProfile
    audited: bool = False

    @property
    def name(self) -> str:
        return self.profile.name

    def serialize(self, row: Any) -> Dict[str, Any]:
        return self.out_schema.model_validate(row).model_dump(mode="json")

    def has_column(self, name: str) -> bool:
        return name in self.model.__table__.columns


TABLES: Dict[str, TableSpec] = {
    spec.name: spec
    for spec in (
        TableSpec(
            Employee,
            schemas.EmployeeCreate,
            schemas.EmployeeUpdate,
            schemas.EmployeeOut,
            EMPLOYEES,
            audited=True,
        ),
        TableSpec(
            PayrollEmployee,
            schemas.PayrollEmployeeCreate,
            schemas.PayrollEmployeeUpdate,
            schemas.PayrollEmployeeOut,
            PAYROLL_EMPLOYEES,
            audited=True,
        ),
        TableSpec(
            AuditEvent,
            schemas.AuditEventCreate,
            schemas.AuditEventUpdate,
            schemas.AuditEventOut,
            AUDIT_EVENTS,
        ),
    )
}
