from __future__ import annotations
from typing import Any, Dict, Optional
from flask import has_request_context, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from bootstrapper import get_db
from bootstrapper.models.audit import AuditLog


def current_actor_id() -> int:
    """Numeric id of the JWT subject, or 0 when the request carries no token."""
    verify_jwt_in_request(optional=True)
    ident = get_jwt_identity()
    try:
        return int(ident) if ident is not None else 0
    except (TypeError, ValueError):
        return 0


def add_audit(action: str, entity: Optional[str] = None, entity_id: Optional[str] = None, meta: Optional[Dict[str, Any]] = None):
    """Stage an audit entry for an initialization control call in the current session.

    The caller commits. ``entity`` falls back to the column default ('Initialization');
    ``meta`` is stored only when non-empty.
    """
    entry = AuditLog(
        action=action,
        actor_user_id=current_actor_id(),
        entity_id=str(entity_id) if entity_id is not None else None,
        remote_addr=request.remote_addr if has_request_context() else None,
        meta=dict(meta) if meta else None,
    )
    if entity:
        entry.entity = entity
    get_db().add(entry)
    return entry
