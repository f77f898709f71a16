"""
Ops Housekeeping — Settings Accessor
======================================
Reads the HOUSEKEEPING dict from Django settings, falling back to
defaults for any key that is not configured.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "DEFAULT_SUPERVISOR": "manager",
    "CATALOG_CACHE_TTL_SECONDS": 300,
    "CATALOG_CACHE_MAX_SIZE": 512,
}


def housekeeping_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown housekeeping setting '{name}'.")
    configured = getattr(settings, "HOUSEKEEPING", None) or {}
    return configured.get(name, DEFAULTS[name])


def default_supervisor() -> str:
    return str(housekeeping_setting("DEFAULT_SUPERVISOR"))
