"""Suite and result status derivation."""

from __future__ import annotations

from .models import Status


def derive_status(total: int, passed: int, skipped: int = 0) -> Status:
    """Derive a suite/result status from its final counts.

    SKIP when nothing was counted (or everything counted was skipped),
    PASS when every counted test passed, FAIL otherwise. Case statuses
    come from the per-format outcome tables and never pass through here.
    """
    if total == 0 or skipped == total:
        return Status.SKIP
    if passed == total:
        return Status.PASS
    return Status.FAIL
