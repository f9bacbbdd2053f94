from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

EmployeeStatus = Literal["active", "on_leave", "terminated"]
AuditAction = Literal[
    "signature_created",
    "signature_updated",
    "signature_applied",
    "signature_viewed",
    "template_locked",
    "template_unlocked",
    "record_created",
    "record_updated",
    "record_deleted",
]


class EmployeeCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_code: str | None = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str
    position: str | None = None
    department: str | None = None
    status: EmployeeStatus = "active"

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        email = value.strip()
        if "@" not in email:
            raise ValueError("Invalid email format")
        return email


class EmployeeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_code: str | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = None
    position: str | None = None
    department: str | None = None
    status: EmployeeStatus | None = None


class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_code: str | None = None
    first_name: str
    last_name: str
    email: str
    position: str | None = None
    department: str | None = None
    status: str
    created_at: datetime | None = None


class PayrollEmployeeCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_code: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    pay_group_id: str | None = None
    pay_type: Literal["hourly", "salary"] = "salary"
    rate: float = Field(default=0, ge=0)
    default_hours: float = Field(default=0, ge=0)
    status: EmployeeStatus = "active"
    tax: Literal["standard", "low", "high"] = "standard"
    hire_date: date | None = None


class PayrollEmployeeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employee_code: str | None = Field(default=None, min_length=1, max_length=50)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    pay_group_id: str | None = None
    pay_type: Literal["hourly", "salary"] | None = None
    rate: float | None = Field(default=None, ge=0)
    default_hours: float | None = Field(default=None, ge=0)
    status: EmployeeStatus | None = None
    tax: Literal["standard", "low", "high"] | None = None
    hire_date: date | None = None


class PayrollEmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_code: str
    first_name: str
    last_name: str
    pay_group_id: str | None = None
    pay_type: str
    rate: float
    default_hours: float
    status: str
    tax: str
    hire_date: date | None = None
    created_at: datetime | None = None


class AuditEventCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str
    user_name: str
    user_email: str
    action: AuditAction
    template_name: str = ""
    department: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime | None = None


class AuditEventUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    details: dict[str, Any] | None = None


class AuditEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    user_name: str
    user_email: str
    action: str
    template_name: str
    department: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime | None = None
    created_at: datetime | None = None


class ViewOut(BaseModel):
    items: list[dict[str, Any]]
    total: int
    page: int
    page_count: int
    page_size: int


class AuditStatsOut(BaseModel):
    total: int
    by_action: dict[str, int]
    users: list[dict[str, Any]]
    departments: list[str]
