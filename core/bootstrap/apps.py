"""
Ops Bootstrap — App Configuration
===================================
Runs the startup self-check once Django has loaded every app.

Skipped for management commands that run before or without a
migrated schema, and under pytest (tests build their own schema).
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("ops.bootstrap")

SKIP_COMMANDS = frozenset({
    "migrate",
    "makemigrations",
    "showmigrations",
    "sqlmigrate",
    "flush",
    "shell",
    "dbshell",
    "inspectdb",
    "test",
    "check",
})


def _should_skip() -> bool:
    if len(sys.argv) >= 2 and sys.argv[1] in SKIP_COMMANDS:
        return True
    return "PYTEST_CURRENT_TEST" in os.environ or "pytest" in sys.modules


class BootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.bootstrap"
    label = "bootstrap"
    verbose_name = "Ops Bootstrap"

    def ready(self):
        if _should_skip():
            logger.info("Bootstrap self-check skipped for management/test context.")
            return

        from core.bootstrap.self_check import run_bootstrap_checks
        run_bootstrap_checks()
