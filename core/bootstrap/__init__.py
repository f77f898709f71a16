"""
Ops Bootstrap — Startup Self-Check
====================================
Ensures the service never starts on a missing or inconsistent schema.
"""

from core.bootstrap.errors import SystemBootstrapError

__all__ = [
    "SystemBootstrapError",
]
