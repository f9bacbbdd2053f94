"""Data source client for the roster service over HTTP."""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
import structlog

from .errors import AuthFailure, MutationConflict, NetworkFailure, ValidationError
from .models import Item, TenantScope

logger = structlog.get_logger(__name__)

VALIDATION_STATUSES = {400, 413, 415, 422}
CONFLICT_STATUSES = {404, 409}


def _detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if isinstance(detail, list):
        return "; ".join(str(error.get("msg", error)) for error in detail)
    return str(detail or response.reason_phrase)


class HttpDataSource:
    def __init__(self, client: httpx.Client, token: str):
        self.client = client
        self.token = token

    def _headers(self, scope: TenantScope) -> dict:
        return {"Authorization": f"Bearer {self.token}", "X-Tenant-ID": scope.tenant_id}

    def _send(
        self,
        method: str,
        url: str,
        scope: TenantScope,
        *,
        table: Optional[str] = None,
        item_id: Any = None,
        extra_headers: Optional[dict] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = self._headers(scope)
        if extra_headers:
            headers.update(extra_headers)
        try:
            response = self.client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            raise NetworkFailure(f"Request to {url} timed out") from exc
        except httpx.TransportError as exc:
            raise NetworkFailure(f"Could not reach the data source: {exc}") from exc

        if response.is_success:
            return response

        status = response.status_code
        detail = _detail(response)
        logger.warning("data_source_error", method=method, url=url, status=status, detail=detail)
        if status in (401, 403):
            raise AuthFailure(detail)
        if method != "GET" and status in CONFLICT_STATUSES:
            raise MutationConflict(detail, table=table, item_id=item_id)
        # unknown table or row on a read
        if status in VALIDATION_STATUSES or status == 404:
            raise ValidationError(detail)
        raise NetworkFailure(f"Data source responded with {status}: {detail}")

    def query(self, table: str, scope: TenantScope, order_by: Optional[str] = None) -> List[Item]:
        params = {"order_by": order_by} if order_by else None
        return self._send("GET", f"/tables/{table}", scope, table=table, params=params).json()

    def insert(self, table: str, scope: TenantScope, record: Item) -> Item:
        return self._send("POST", f"/tables/{table}", scope, table=table, json=record).json()

    def update(self, table: str, scope: TenantScope, item_id: Any, patch: Item) -> Item:
        return self._send(
            "PATCH", f"/tables/{table}/{item_id}", scope, table=table, item_id=item_id, json=patch
        ).json()

    def delete(self, table: str, scope: TenantScope, item_id: Any) -> None:
        self._send("DELETE", f"/tables/{table}/{item_id}", scope, table=table, item_id=item_id)

    def upload(self, bucket: str, path: str, content: bytes, content_type: str, scope: TenantScope) -> str:
        headers = {"Content-Type": content_type} if content_type else None
        response = self._send("PUT", f"/storage/{bucket}/{path}", scope, content=content, extra_headers=headers)
        return response.json()["path"]
