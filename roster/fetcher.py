from __future__ import annotations

import itertools
import threading
from typing import List, Optional

import structlog

from .errors import AuthFailure, NetworkFailure, StaleResponse
from .models import CollectionProfile, Item, TenantScope
from .sources import DataSource

logger = structlog.get_logger(__name__)


class CollectionFetcher:
    """Retrieves the full collection of one table for a tenant.

    Every call takes a fresh request token. When a newer fetch has been
    issued by the time a response arrives, the response is discarded and
    ``StaleResponse`` is raised instead of returning rows that would
    overwrite fresher state.
    """

    def __init__(self, source: DataSource, profile: CollectionProfile, order_by: Optional[str] = None):
        self.source = source
        self.profile = profile
        self.order_by = order_by or profile.default_sort
        self._tokens = itertools.count(1)
        self._current = 0
        self._lock = threading.Lock()

    @property
    def current_token(self) -> int:
        with self._lock:
            return self._current

    def begin(self) -> int:
        with self._lock:
            self._current = next(self._tokens)
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def fetch(self, scope: TenantScope) -> List[Item]:
        token = self.begin()
        log = logger.bind(table=self.profile.name, tenant_id=scope.tenant_id, token=token)
        try:
            rows = self.source.query(self.profile.name, scope, order_by=self.order_by)
        except AuthFailure:
            log.warning("collection_fetch_unauthorized")
            raise
        except NetworkFailure as exc:
            log.warning("collection_fetch_failed", error=exc.message)
            raise

        if not self.is_current(token):
            current = self.current_token
            log.info("collection_fetch_stale", current=current)
            raise StaleResponse(token, current)

        log.info("collection_fetched", count=len(rows))
        return rows
