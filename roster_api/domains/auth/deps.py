from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from roster.models import TenantScope
from roster_api.db.session import get_session, utcnow
from roster_api.models.auth_session import AuthSession


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_scope(
    authorization: str | None = Header(default=None),
    x_tenant_id: str | None = Header(default=None),
    db: Session = Depends(get_session),
) -> TenantScope:
    """Resolve the caller's tenant scope from their bearer token."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    session = db.query(AuthSession).filter(AuthSession.token == token).one_or_none()
    if session is None or session.expires_at <= utcnow():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")

    if x_tenant_id and x_tenant_id != session.tenant_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tenant mismatch")

    return TenantScope(tenant_id=session.tenant_id, user_id=str(session.user_id), role=session.user.role)


def require_admin(scope: TenantScope = Depends(get_scope)) -> TenantScope:
    if scope.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return scope
