"""
Ops HTTP API - Dependencies
===========================
Injected clock and catalog reference data for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.housekeeping.agenda import CatalogLookup
from core.time.clock import Clock


@dataclass(frozen=True)
class HttpApiDependencies:
    clock: Clock
    catalog: CatalogLookup
