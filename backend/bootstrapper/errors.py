"""Initialization error taxonomy.

Every error raised by the bootstrap pipeline derives from InitializationError so
callers (HTTP handlers, CLI) can catch one type. Errors raised out of the
orchestrator carry the RunState as it stood when the error happened.
"""
from __future__ import annotations
from typing import Any, List, Optional


class InitializationError(Exception):
    http_status = 500

    def __init__(self, message: str, state: Optional[Any] = None):
        super().__init__(message)
        self.state = state


class NotYetInitialized(InitializationError):
    """An operation that requires earlier steps was invoked before they ran."""
    http_status = 409


class AlreadyInitialized(InitializationError):
    """Reinitialization (or reset) attempted without permission."""
    http_status = 409


class ModeLocked(InitializationError):
    http_status = 409


class InvalidTransition(InitializationError):
    http_status = 409


class DependencyMissing(InitializationError):
    """A required upstream entity (tenant, admin user, role) does not exist."""
    http_status = 424


class CreationFailed(InitializationError):
    """The persistence layer rejected a create call."""

    def __init__(self, kind: str, key: Any, cause: Optional[BaseException] = None):
        detail = f"failed to create {kind} '{key}'"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)
        self.kind = kind
        self.key = key


class SeedDataInvalid(InitializationError):
    """Seed data for a step is structurally unusable (e.g. required menus missing)."""


class StepFailed(InitializationError):
    def __init__(self, step: str, cause: BaseException, state: Optional[Any] = None):
        super().__init__(f"initialization step {step} failed: {cause}", state)
        self.step = step
        self.cause = cause
        if isinstance(cause, InitializationError):
            self.http_status = cause.http_status


class ValidationWarning(InitializationError):
    """Consistency findings in seed data. Advisory, never blocks provisioning."""
    http_status = 422

    def __init__(self, findings: List[Any]):
        super().__init__(f"seed data has {len(findings)} consistency issue(s)")
        self.findings = list(findings)


class MalformedSeedRow(InitializationError):
    """A static policy or inheritance row has fewer fields than required."""
    http_status = 422

    def __init__(self, kind: str, row: Any, required: int):
        super().__init__(f"invalid {kind} rule (need {required} fields, got {len(row)}): {list(row)}")
        self.kind = kind
        self.row = row
        self.required = required


__all__ = [
    'InitializationError', 'NotYetInitialized', 'AlreadyInitialized', 'ModeLocked', 'InvalidTransition',
    'DependencyMissing', 'CreationFailed', 'SeedDataInvalid', 'StepFailed', 'ValidationWarning',
    'MalformedSeedRow',
]
