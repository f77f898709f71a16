"""
Ops Django Adapter Wiring
=========================
Constructs HttpApiDependencies for the running process.

This module is adapter-only glue:
- real system clock
- one catalog reference cache per process, sized from settings
"""

from __future__ import annotations

import threading

from core.housekeeping.catalog import CatalogReferenceCache
from core.http_api.dependencies import HttpApiDependencies
from core.time.clock import get_default_clock

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    return HttpApiDependencies(
        clock=get_default_clock(),
        catalog=CatalogReferenceCache(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached wiring so the next request rebuilds it (tests)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
