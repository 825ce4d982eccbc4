from __future__ import annotations
import logging
from typing import Dict, Iterable, Mapping, Set

from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def create_permissions(ctx: ProvisionContext) -> int:
    created = 0
    for tpl in ctx.loader.permissions:
        if ctx.store.permissions.get_by_key(tpl.name) is not None:
            log.debug('permission %s already exists, skipping', tpl.name)
            continue
        ctx.store.permissions.create(
            name=tpl.name,
            action=tpl.action,
            subject=tpl.subject,
            description=tpl.description,
            disabled=tpl.disabled,
        )
        created += 1
    return created


def assign_role_permissions(ctx: ProvisionContext, mapping: Mapping[str, Iterable[str]]) -> int:
    """Grant each role its named permissions; returns the number of new grants."""
    assigned = 0
    for role_slug, names in mapping.items():
        role = ctx.store.roles.get_by_key(role_slug)
        if role is None:
            log.warning('role %s not found, skipping permission assignment', role_slug)
            continue
        for name in names:
            permission = ctx.store.permissions.get_by_key(name)
            if permission is None:
                log.warning('permission %s referenced by role %s not found', name, role_slug)
                continue
            if ctx.store.assign_permission(role, permission):
                assigned += 1
    log.info('assigned %d role permission(s)', assigned)
    return assigned


def role_permission_gaps(ctx: ProvisionContext) -> Dict[str, Set[str]]:
    """Expected permission names each existing role is missing."""
    gaps: Dict[str, Set[str]] = {}
    for role_slug, expected in ctx.loader.role_permissions.items():
        role = ctx.store.roles.get_by_key(role_slug)
        if role is None:
            continue
        assigned = {p.name for p in ctx.store.permissions_for_role(role.id)}
        missing = set(expected) - assigned
        if missing:
            gaps[role_slug] = missing
    return gaps


def verify_role_permissions(ctx: ProvisionContext) -> int:
    gaps = role_permission_gaps(ctx)
    if not gaps:
        log.debug('all role permission assignments present')
        return 0
    log.warning('missing role permissions for %s, re-running assignment', sorted(gaps))
    return assign_role_permissions(ctx, {slug: sorted(names) for slug, names in gaps.items()})


def _create(ctx: ProvisionContext) -> int:
    created = create_permissions(ctx)
    assign_role_permissions(ctx, ctx.loader.role_permissions)
    return created


def check(ctx: ProvisionContext) -> int:
    return run_guarded(
        'permissions',
        count=ctx.store.permissions.count,
        create=lambda: _create(ctx),
        verify=lambda: verify_role_permissions(ctx),
    )


__all__ = ['create_permissions', 'assign_role_permissions', 'role_permission_gaps', 'verify_role_permissions', 'check']
