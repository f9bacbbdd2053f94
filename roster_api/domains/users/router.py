from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func
from sqlalchemy.orm import Session

from roster.models import TenantScope
from roster_api.core.logging import get_logger
from roster_api.db.session import get_session, utcnow
from roster_api.domains.auth.deps import get_scope
from roster_api.domains.auth.router import hash_password
from roster_api.models.tenant import Tenant
from roster_api.models.user import User

router = APIRouter(prefix="/users", tags=["users"])
logger = get_logger(__name__)

Role = Literal["admin", "payroll", "people_ops", "viewer"]


class UserCreate(BaseModel):
    email: str
    password: str = Field(..., min_length=8)
    role: Role = "viewer"
    full_name: str | None = None
    tenant_id: str = Field(..., min_length=1, max_length=64)
    tenant_name: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        email = value.strip()
        if "@" not in email:
            raise ValueError("Invalid email format")
        return email


class UserOut(BaseModel):
    id: int
    email: str
    role: Role
    tenant_id: str
    full_name: str | None = None
    created_at: datetime


def _sanitize(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        full_name=user.full_name,
        created_at=user.created_at or utcnow(),
    )


@router.get("", response_model=list[UserOut])
def list_users(scope: TenantScope = Depends(get_scope), db: Session = Depends(get_session)) -> list[UserOut]:
    users = (
        db.query(User)
        .filter(User.tenant_id == scope.tenant_id)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    return [_sanitize(user) for user in users]


@router.post("", response_model=UserOut, status_code=201)
def create_user(
    payload: UserCreate,
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_session),
) -> UserOut:
    """Create a user; the first user of a tenant bootstraps it as admin."""
    tenant = db.get(Tenant, payload.tenant_id)
    role = payload.role
    if tenant is None:
        tenant = Tenant(id=payload.tenant_id, name=payload.tenant_name or payload.tenant_id)
        db.add(tenant)
        role = "admin"
    else:
        scope = get_scope(authorization=authorization, x_tenant_id=None, db=db)
        if scope.tenant_id != tenant.id or scope.role != "admin":
            raise HTTPException(status_code=403, detail="Admin role required")

    existing_user = (
        db.query(User)
        .filter(func.lower(User.email) == payload.email.lower())
        .one_or_none()
    )
    if existing_user:
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=payload.email.strip(),
        full_name=payload.full_name,
        hashed_password=hash_password(payload.password),
        role=role,
        tenant_id=tenant.id,
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user_created", email=payload.email, role=role, tenant_id=tenant.id)
    return _sanitize(user)
