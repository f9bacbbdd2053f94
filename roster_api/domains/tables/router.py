"""Tenant-scoped table access.

Rows are always restricted to the caller's tenant. ``GET /tables/{table}``
returns the whole tenant partition for client-side filtering; ``/view``
applies the same filter and pagination server-side.
"""

from __future__ import annotations

from typing import Any, Type

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Query as OrmQuery
from sqlalchemy.orm import Session

from roster.models import ALL, PAGE_SIZES, FilterState, TenantScope
from roster.stats import audit_stats
from roster.view import build_view
from roster_api.core.config import settings
from roster_api.core.logging import get_logger
from roster_api.core.observability import mutation_counter, tracer, view_rows_histogram
from roster_api.db.session import get_session, utcnow
from roster_api.domains.auth.deps import get_scope, require_admin
from roster_api.models import AuditEvent, User

from .registry import TABLES, TableSpec
from .schemas import AuditStatsOut, ViewOut

router = APIRouter(prefix="/tables", tags=["tables"])
logger = get_logger(__name__)


def get_table(table: str) -> TableSpec:
    spec = TABLES.get(table)
    if spec is None:
        raise HTTPException(status_code=404, detail=f"Unknown table {table}")
    return spec


def _validate(schema: Type[BaseModel], payload: dict[str, Any]) -> BaseModel:
    try:
        return schema.model_validate(payload)
    except SchemaError as exc:
        raise HTTPException(
            status_code=422, detail=jsonable_encoder(exc.errors(include_url=False, include_context=False))
        ) from exc


def _tenant_rows(db: Session, spec: TableSpec, scope: TenantScope) -> OrmQuery:
    return db.query(spec.model).filter(spec.model.tenant_id == scope.tenant_id)


def _ordered(query: OrmQuery, spec: TableSpec, order_by: str | None) -> OrmQuery:
    model = spec.model
    if not order_by:
        return query.order_by(model.created_at.asc(), model.id.asc())
    descending = order_by.startswith("-")
    column = order_by.lstrip("-")
    if not spec.has_column(column) or column == "tenant_id":
        raise HTTPException(status_code=400, detail=f"Cannot order {spec.name} by {column}")
    attr = getattr(model, column)
    if descending:
        return query.order_by(attr.is_(None), attr.desc(), model.id.desc())
    return query.order_by(attr.is_(None), attr.asc(), model.id.asc())


def _get_row(db: Session, spec: TableSpec, scope: TenantScope, item_id: int):
    row = _tenant_rows(db, spec, scope).filter(spec.model.id == item_id).one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail=f"{spec.name} row {item_id} not found")
    return row


def _record_audit(db: Session, spec: TableSpec, scope: TenantScope, action: str, row: Any, fields: list[str]) -> None:
    if not spec.audited:
        return
    user = db.get(User, int(scope.user_id)) if scope.user_id else None
    db.add(
        AuditEvent(
            tenant_id=scope.tenant_id,
            user_id=scope.user_id or "system",
            user_name=(user.full_name or user.email) if user else "system",
            user_email=user.email if user else "",
            action=action,
            template_name=f"{spec.name} #{row.id}",
            department=getattr(row, "department", None),
            details={"table": spec.name, "id": row.id, "fields": sorted(fields)},
            occurred_at=utcnow(),
        )
    )


@router.get("/audit_events/stats", response_model=AuditStatsOut)
def get_audit_stats(scope: TenantScope = Depends(get_scope), db: Session = Depends(get_session)) -> AuditStatsOut:
    spec = TABLES["audit_events"]
    rows = [spec.serialize(row) for row in _ordered(_tenant_rows(db, spec, scope), spec, "-occurred_at")]
    stats = audit_stats(rows)
    return AuditStatsOut(
        total=stats.total, by_action=stats.by_action, users=stats.users, departments=stats.departments
    )


@router.get("/{table}", response_model=list[dict[str, Any]])
def list_rows(
    spec: TableSpec = Depends(get_table),
    order_by: str | None = None,
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> list[dict[str, Any]]:
    rows = _ordered(_tenant_rows(db, spec, scope), spec, order_by).all()
    logger.info("rows_listed", table=spec.name, tenant_id=scope.tenant_id, count=len(rows))
    return [spec.serialize(row) for row in rows]


@router.get("/{table}/view", response_model=ViewOut)
def view_rows(
    request: Request,
    spec: TableSpec = Depends(get_table),
    search: str = "",
    status: str = ALL,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.default_page_size),
    sort_by: str | None = None,
    descending: bool = False,
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> ViewOut:
    if page_size not in PAGE_SIZES:
        raise HTTPException(status_code=422, detail=f"page_size must be one of {list(PAGE_SIZES)}")
    if sort_by and not spec.has_column(sort_by):
        raise HTTPException(status_code=400, detail=f"Cannot sort {spec.name} by {sort_by}")

    profile = spec.profile
    state = FilterState(
        search_term=search,
        status_filter=status,
        facets={name: request.query_params.get(name, ALL) for name in profile.facet_fields},
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        descending=descending,
    )
    with tracer.start_as_current_span("tables.view", attributes={"roster.table": spec.name}):
        rows = [spec.serialize(row) for row in _ordered(_tenant_rows(db, spec, scope), spec, profile.default_sort)]
        view = build_view(rows, profile, state)
    view_rows_histogram.record(view.total, {"table": spec.name})

    return ViewOut(
        items=view.visible,
        total=view.total,
        page=view.page,
        page_count=view.page_count,
        page_size=view.page_size,
    )


@router.get("/{table}/{item_id}", response_model=dict[str, Any])
def get_row(
    item_id: int,
    spec: TableSpec = Depends(get_table),
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    return spec.serialize(_get_row(db, spec, scope, item_id))


@router.post("/{table}", response_model=dict[str, Any], status_code=201)
def create_row(
    payload: dict[str, Any] = Body(...),
    spec: TableSpec = Depends(get_table),
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    values = _validate(spec.create_schema, payload).model_dump(exclude_none=True)
    row = spec.model(tenant_id=scope.tenant_id, **values)
    db.add(row)
    db.flush()
    _record_audit(db, spec, scope, "record_created", row, list(values))
    db.commit()
    db.refresh(row)

    mutation_counter.add(1, {"table": spec.name, "action": "create"})
    logger.info("row_created", table=spec.name, tenant_id=scope.tenant_id, id=row.id)
    return spec.serialize(row)


@router.patch("/{table}/{item_id}", response_model=dict[str, Any])
def update_row(
    item_id: int,
    payload: dict[str, Any] = Body(...),
    spec: TableSpec = Depends(get_table),
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    patch = _validate(spec.update_schema, payload).model_dump(exclude_unset=True)
    columns = spec.model.__table__.columns
    required = [name for name, value in patch.items() if value is None and not columns[name].nullable]
    if required:
        raise HTTPException(status_code=422, detail=f"Fields cannot be empty: {', '.join(sorted(required))}")

    row = _get_row(db, spec, scope, item_id)
    for name, value in patch.items():
        setattr(row, name, value)
    _record_audit(db, spec, scope, "record_updated", row, list(patch))
    db.commit()
    db.refresh(row)

    mutation_counter.add(1, {"table": spec.name, "action": "update"})
    logger.info("row_updated", table=spec.name, tenant_id=scope.tenant_id, id=row.id, fields=sorted(patch))
    return spec.serialize(row)


@router.delete("/{table}/{item_id}", status_code=204)
def delete_row(
    item_id: int,
    spec: TableSpec = Depends(get_table),
    scope: TenantScope = Depends(require_admin),
    db: Session = Depends(get_session),
):
    row = _get_row(db, spec, scope, item_id)
    _record_audit(db, spec, scope, "record_deleted", row, [])
    db.delete(row)
    db.commit()

    mutation_counter.add(1, {"table": spec.name, "action": "delete"})
    logger.info("row_deleted", table=spec.name, tenant_id=scope.tenant_id, id=item_id)
    return None
