"""Lookup tables translating abstract permission (subject, action) pairs into
route-shaped policy objects. Extend cautiously; compiled policy rows are never
rewritten, so renaming a path leaves stale rules behind.
"""
from __future__ import annotations
from typing import Dict, Tuple

STATE_OPTION_KEY = 'system.initialization.state'
BACKUP_OPTION_PREFIX = 'system.initialization.backup.'
STATE_VERSION = '1.0.0'

WILDCARD = '*'

SUBJECT_RESOURCE_PATHS: Dict[str, str] = {
    'account': '/iam/account',
    'user': '/user/users',
    'employee': '/user/employees',
    'menu': '/sys/menus',
    'dictionary': '/sys/dictionaries',
    'system': '/sys/options',
    'role': '/access/roles',
    'permission': '/access/permissions',
    'tenant': '/tenant/tenants',
    'group': '/space/groups',
    'content': '/content/topics',
    'taxonomy': '/content/taxonomies',
    'resource': '/resources',
    'workflow': '/workflow/processes',
    'task': '/workflow/tasks',
    'payment': '/payment/orders',
    'realtime': '/realtime/notifications',
    'proxy': '/proxy/*',
    'counter': '/counter/*',
}

ACTION_METHODS: Dict[str, str] = {
    'read': 'GET',
    'create': 'POST',
    'update': 'PUT',
    'delete': 'DELETE',
    'manage': WILDCARD,
    WILDCARD: WILDCARD,
}


def map_permission(subject: str, action: str) -> Tuple[str, str]:
    """Return (resource_path, http_method) for a permission.

    Unknown subjects fall back to "/<subject>/*" and unknown actions to "*".
    Empty subject or action yields ('', '') so the caller can skip it.
    """
    if not subject or not action:
        return '', ''
    path = SUBJECT_RESOURCE_PATHS.get(subject, f"/{subject}/*")
    return path, ACTION_METHODS.get(action, WILDCARD)


__all__ = [
    'STATE_OPTION_KEY', 'BACKUP_OPTION_PREFIX', 'STATE_VERSION', 'WILDCARD',
    'SUBJECT_RESOURCE_PATHS', 'ACTION_METHODS', 'map_permission',
]
