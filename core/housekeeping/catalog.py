"""
Ops Housekeeping — Catalog Reference Data
===========================================
Read-only lookup of task catalog rows by id, merged in-process by the
agenda reader (no join).

CatalogReferenceCache keeps a bounded, process-local copy:
- entries expire after CATALOG_CACHE_TTL_SECONDS
- misses are fetched in ONE bulk query per lookup
- ids with no catalog row are not cached, so a catalog entry created
  later shows up on the next read
- refresh() drops everything
Database errors propagate; the caller decides how to degrade.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from core.caching import TTLCache
from core.housekeeping.conf import housekeeping_setting
from core.housekeeping.models import TaskCatalogEntry

logger = logging.getLogger("ops.housekeeping")


@dataclass(frozen=True)
class CatalogRef:
    id: uuid.UUID
    name: str
    area: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "area": self.area}


def _unique_ids(task_ids: Iterable[Any]) -> tuple[uuid.UUID, ...]:
    seen: dict[uuid.UUID, None] = {}
    for raw in task_ids:
        if raw is None:
            continue
        value = raw if isinstance(raw, uuid.UUID) else uuid.UUID(str(raw))
        seen.setdefault(value, None)
    return tuple(seen)


def fetch_catalog_refs(task_ids: Iterable[Any]) -> dict[uuid.UUID, CatalogRef]:
    """Bulk-fetch catalog rows for the given ids. Missing ids are absent."""
    ids = _unique_ids(task_ids)
    if not ids:
        return {}
    rows = TaskCatalogEntry.objects.filter(id__in=ids).values_list("id", "name", "area")
    return {
        row_id: CatalogRef(id=row_id, name=name, area=area)
        for row_id, name, area in rows
    }


class CatalogReferenceCache:
    def __init__(
        self,
        *,
        max_size: Optional[int] = None,
        ttl_seconds: Optional[int] = None,
    ) -> None:
        self._cache = TTLCache(
            max_size=int(
                max_size
                if max_size is not None
                else housekeeping_setting("CATALOG_CACHE_MAX_SIZE")
            ),
            default_ttl_seconds=int(
                ttl_seconds
                if ttl_seconds is not None
                else housekeeping_setting("CATALOG_CACHE_TTL_SECONDS")
            ),
        )
        self._lock = threading.Lock()

    def lookup(
        self,
        task_ids: Iterable[Any],
        *,
        now: datetime,
    ) -> dict[uuid.UUID, CatalogRef]:
        ids = _unique_ids(task_ids)
        found: dict[uuid.UUID, CatalogRef] = {}
        missing: list[uuid.UUID] = []
        with self._lock:
            for task_id in ids:
                cached = self._cache.get(str(task_id), now)
                if cached is None:
                    missing.append(task_id)
                else:
                    found[task_id] = cached

        if missing:
            fetched = fetch_catalog_refs(missing)
            with self._lock:
                for task_id, ref in fetched.items():
                    self._cache.put(str(task_id), ref, now)
            found.update(fetched)
            logger.debug(
                "Catalog cache filled requested=%s fetched=%s",
                len(missing),
                len(fetched),
            )
        return found

    def refresh(self) -> int:
        with self._lock:
            dropped = self._cache.clear()
        logger.info("Catalog cache refreshed dropped=%s", dropped)
        return dropped

    @property
    def stats(self) -> dict[str, Any]:
        with self._lock:
            return self._cache.stats.to_dict()
