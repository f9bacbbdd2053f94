from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from hashlib import sha256
from hmac import compare_digest

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func
from sqlalchemy.orm import Session

from roster_api.core.config import settings
from roster_api.core.logging import get_logger
from roster_api.db.session import get_session, utcnow
from roster_api.models.auth_session import AuthSession
from roster_api.models.user import User

from .deps import _bearer_token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=8)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        email = value.strip()
        if "@" not in email:
            raise ValueError("Invalid email")
        return email


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    email: str
    role: str
    tenant_id: str
    expires_at: datetime


def hash_password(raw: str) -> str:
    return sha256(raw.encode("utf-8")).hexdigest()


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_session)) -> LoginResponse:
    logger.info("login_attempt", email=payload.email)
    user = (
        db.query(User)
        .filter(func.lower(User.email) == payload.email.lower())
        .one_or_none()
    )

    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not compare_digest(user.hashed_password, hash_password(payload.password)):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    session = AuthSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        tenant_id=user.tenant_id,
        expires_at=utcnow() + timedelta(minutes=settings.session_ttl_minutes),
    )
    db.add(session)
    db.commit()
    logger.info("login_success", email=payload.email, role=user.role, tenant_id=user.tenant_id)

    return LoginResponse(
        access_token=session.token,
        email=user.email,
        role=user.role,
        tenant_id=user.tenant_id,
        expires_at=session.expires_at,
    )


@router.post("/logout", status_code=204)
def logout(authorization: str | None = Header(default=None), db: Session = Depends(get_session)):
    token = _bearer_token(authorization)
    if token:
        db.query(AuthSession).filter(AuthSession.token == token).delete()
        db.commit()
    return None
