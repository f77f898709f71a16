"""
Ops Bootstrap — System Errors
===============================
If a core invariant is violated at startup,
the system must refuse to live.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a critical system invariant is violated during boot.
    The process must not start; there is no warning-only mode.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"OPS BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
