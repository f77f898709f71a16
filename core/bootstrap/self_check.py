"""
Ops Bootstrap — Self-Check Orchestrator
=========================================
Runs all invariant checks at system startup.
If any check fails → SystemBootstrapError propagates → system refuses to start.

Check order:
1. Housekeeping tables exist
2. Completion rows agree with instance status
"""

import logging

from core.bootstrap.invariants import (
    check_completion_status_consistency,
    check_housekeeping_tables,
)

logger = logging.getLogger("ops.bootstrap")


def run_bootstrap_checks():
    """
    Execute all system invariant checks.
    Called once at startup via AppConfig.ready().
    """
    logger.info("═══ Ops Bootstrap Self-Check Starting ═══")

    check_housekeeping_tables()
    check_completion_status_consistency()

    logger.info("═══ Ops Bootstrap Self-Check PASSED ═══")
