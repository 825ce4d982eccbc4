from __future__ import annotations
import logging
from typing import Dict, Optional

from bootstrapper.errors import DependencyMissing
from bootstrapper.models import Tenant
from .context import ProvisionContext
from .guard import run_guarded
from .permissions import assign_role_permissions
from .policy import compile_dynamic
from .roles import create_roles

log = logging.getLogger(__name__)


def _org_id(ctx: ProvisionContext, ids: Dict[str, int], slug: str, tenant: Tenant) -> Optional[int]:
    if slug in ids:
        return ids[slug]
    row = ctx.store.organizations.get_by_key(slug, tenant_id=tenant.id)
    return row.id if row is not None else None


def create_tree(ctx: ProvisionContext, tenant: Tenant, owner_id: Optional[int]) -> Dict[str, int]:
    """Create every node parents-first; returns slug -> id for the whole tree."""
    ids: Dict[str, int] = {}
    created = 0
    for parent_slug, node in ctx.loader.organization.nodes():
        parent_id = None
        if parent_slug:
            parent_id = _org_id(ctx, ids, parent_slug, tenant)
            if parent_id is None:
                log.warning('parent organization %s for %s not found, skipping', parent_slug, node.slug)
                continue
        existing = ctx.store.organizations.get_by_key(node.slug, tenant_id=tenant.id)
        if existing is not None:
            ids[node.slug] = existing.id
            continue
        row = ctx.store.organizations.create(
            tenant_id=tenant.id,
            parent_id=parent_id,
            name=node.name,
            slug=node.slug,
            type=node.type,
            description=node.description,
            created_by=owner_id,
        )
        ids[node.slug] = row.id
        created += 1
        log.debug('created %s %s', node.type, node.slug)
    log.info('created %d organization(s)', created)
    return ids


def assign_members(ctx: ProvisionContext, tenant: Tenant, ids: Dict[str, int]) -> int:
    assigned = 0
    for username, slugs in ctx.loader.organization.members.items():
        user = ctx.store.users.get_by_key(username)
        if user is None:
            log.warning('organization member %s not found, skipping', username)
            continue
        for slug in slugs:
            org_id = _org_id(ctx, ids, slug, tenant)
            if org_id is None:
                log.warning('organization %s for member %s not found, skipping', slug, username)
                continue
            if ctx.store.user_organizations.count(user_id=user.id, organization_id=org_id):
                continue
            ctx.store.user_organizations.create(user_id=user.id, organization_id=org_id)
            assigned += 1
    return assigned


def assign_position_roles(ctx: ProvisionContext, tenant: Tenant) -> int:
    """Give employees the organization role matching their position, scoped to the tenant."""
    position_roles = ctx.loader.organization.position_roles
    assigned = 0
    for tpl in ctx.loader.users:
        if tpl.employee is None or tpl.employee.position not in position_roles:
            continue
        role_slug = position_roles[tpl.employee.position]
        role = ctx.store.roles.get_by_key(role_slug)
        user = ctx.store.users.get_by_key(tpl.username)
        if role is None or user is None:
            log.warning('cannot assign organization role %s to %s', role_slug, tpl.username)
            continue
        if ctx.store.assign_role(user, role, tenant.id):
            assigned += 1
    return assigned


def create_organizations(ctx: ProvisionContext, tenant: Tenant) -> int:
    structure = ctx.loader.organization
    owner_id = None
    if ctx.profile.organization_owner:
        owner = ctx.store.users.get_by_key(ctx.profile.organization_owner)
        if owner is None:
            raise DependencyMissing(f"organization owner '{ctx.profile.organization_owner}' not found")
        owner_id = owner.id
    ids = create_tree(ctx, tenant, owner_id)
    roles_created = create_roles(ctx, structure.roles, is_system=False)
    assign_role_permissions(ctx, structure.role_permissions)
    # policies ran before these roles existed
    rules = compile_dynamic(ctx)
    members = assign_members(ctx, tenant, ids)
    positions = assign_position_roles(ctx, tenant)
    log.info('organization structure completed: %d nodes, %d roles created, %d policy rules, %d memberships, '
             '%d position roles',
             len(ids), roles_created, rules, members, positions)
    return len(ids)


def check(ctx: ProvisionContext) -> int:
    if ctx.loader.organization.is_empty:
        log.info('no organization structure for %s mode, skipping', ctx.loader.mode.value)
        return 0
    tenant = ctx.require_default_tenant()
    return run_guarded(
        'organizations',
        count=lambda: ctx.store.organizations.count(tenant_id=tenant.id),
        create=lambda: create_organizations(ctx, tenant),
    )


__all__ = ['create_tree', 'assign_members', 'assign_position_roles', 'create_organizations', 'check']
