"""Audit logging decorator for the initialization control endpoints.

Usage:

@audit_log('INIT.BACKUP.RESTORE', entity='InitializationBackup', entity_id_arg='key')
def restore_backup(key): ...

Parameters:
  action: required audit action code (e.g. INIT.RESET)
  entity: optional entity label
  entity_id_key: key in the returned JSON object whose value becomes entity_id.
  entity_id_arg: name of the path parameter to use for entity_id (fallback if entity_id_key absent).
  meta_keys: list of keys to project from returned JSON into meta dict (shallow copy).

Only successful calls are audited; an exception raised by the view propagates
before anything is recorded.
"""
from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from bootstrapper.services.audit import add_audit
from bootstrapper import get_db

log = logging.getLogger(__name__)


def _extract_payload(rv: Any):
    if isinstance(rv, tuple) and rv:
        return rv[0]
    return rv


def audit_log(
    action: str,
    *,
    entity: Optional[str] = None,
    entity_id_key: Optional[str] = None,
    entity_id_arg: Optional[str] = None,
    meta_keys: Optional[Iterable[str]] = None,
):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            rv = fn(*args, **kwargs)
            data = _extract_payload(rv)
            entity_id = None
            meta = None
            if isinstance(data, dict):
                if entity_id_key and entity_id_key in data:
                    entity_id = data.get(entity_id_key)
                if meta_keys:
                    meta = {k: data.get(k) for k in meta_keys if k in data}
            if entity_id is None and entity_id_arg and entity_id_arg in kwargs:
                entity_id = kwargs.get(entity_id_arg)
            add_audit(action, entity, entity_id, meta)
            session = get_db()
            try:
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                log.exception('failed to record audit entry %s', action)
            return rv
        return wrapper
    return outer
