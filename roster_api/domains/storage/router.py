from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from roster.errors import ValidationError
from roster.models import TenantScope
from roster.uploads import UploadRule, rule_for_bucket, safe_object_path
from roster_api.core.logging import get_logger
from roster_api.core.observability import mutation_counter
from roster_api.db.session import get_session
from roster_api.domains.auth.deps import get_scope
from roster_api.models.stored_object import StoredObject

router = APIRouter(prefix="/storage", tags=["storage"])
logger = get_logger(__name__)


def get_bucket_rule(bucket: str) -> UploadRule:
    rule = rule_for_bucket(bucket)
    if rule is None:
        raise HTTPException(status_code=404, detail=f"Unknown bucket {bucket}")
    return rule


def _object_path(path: str) -> str:
    try:
        return safe_object_path(path)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc


async def _read_capped(request: Request, rule: UploadRule) -> bytes:
    # Chunked uploads carry no content-length, so the limit is enforced while reading.
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > rule.max_bytes:
            raise HTTPException(status_code=413, detail=f"{rule.label} exceeds {rule.max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def _store_object(
    db: Session, scope: TenantScope, bucket: str, path: str, content: bytes, content_type: str
) -> StoredObject:
    stored = (
        db.query(StoredObject)
        .filter(
            StoredObject.tenant_id == scope.tenant_id,
            StoredObject.bucket == bucket,
            StoredObject.path == path,
        )
        .one_or_none()
    )
    if stored is None:
        stored = StoredObject(tenant_id=scope.tenant_id, bucket=bucket, path=path)
        db.add(stored)
    stored.content = content
    stored.size = len(content)
    stored.content_type = content_type or None
    db.commit()
    return stored


@router.put("/{bucket}/{path:path}")
async def upload_object(
    bucket: str,
    path: str,
    request: Request,
    rule: UploadRule = Depends(get_bucket_rule),
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> dict[str, str]:
    object_path = _object_path(path)
    content_type = request.headers.get("content-type", "")

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > rule.max_bytes:
        raise HTTPException(status_code=413, detail=f"{rule.label} exceeds {rule.max_bytes} bytes")
    if not rule.accepts_type(object_path, content_type):
        raise HTTPException(status_code=415, detail=f"Unsupported type for {rule.label}")

    content = await _read_capped(request, rule)
    try:
        rule.check(object_path, len(content), content_type)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc

    await run_in_threadpool(_store_object, db, scope, bucket, object_path, content, content_type)

    mutation_counter.add(1, {"table": "stored_objects", "action": "upload"})
    logger.info("object_stored", bucket=bucket, path=object_path, size=len(content), tenant_id=scope.tenant_id)
    return {"path": f"{bucket}/{object_path}"}


@router.get("/{bucket}/{path:path}")
def download_object(
    bucket: str,
    path: str,
    scope: TenantScope = Depends(get_scope),
    db: Session = Depends(get_session),
) -> Response:
    stored = (
        db.query(StoredObject)
        .filter(
            StoredObject.tenant_id == scope.tenant_id,
            StoredObject.bucket == bucket,
            StoredObject.path == _object_path(path),
        )
        .one_or_none()
    )
    if stored is None:
        raise HTTPException(status_code=404, detail="Object not found")
    return Response(content=stored.content, media_type=stored.content_type or "application/octet-stream")
