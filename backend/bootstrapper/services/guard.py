"""Existence guard shared by every provisioner.

    run_guarded('roles', count=lambda: store.roles.count(), create=..., verify=...)

A non-zero count skips creation; kinds that can drift (roles, permissions, users)
pass a verify callable which re-runs only their assignment step.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional

log = logging.getLogger(__name__)


def run_guarded(kind: str, count: Callable[[], int], create: Callable[[], int],
                verify: Optional[Callable[[], int]] = None) -> int:
    """Return the number of rows created (or repaired by verification)."""
    existing = count()
    if existing > 0:
        if verify is None:
            log.info('%s already exist (%d), skipping', kind, existing)
            return 0
        log.info('%s already exist (%d), verifying assignments', kind, existing)
        repaired = verify()
        if repaired:
            log.warning('%s verification repaired %d missing assignment(s)', kind, repaired)
        return repaired
    created = create()
    log.info('%s initialized, created %d', kind, created)
    return created


__all__ = ['run_guarded']
