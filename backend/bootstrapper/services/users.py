"""User provisioning.

Employees are created with manager_id NULL; resolve_managers() fills the link in a
second pass once every templated user exists, so templates may reference managers
declared later in the list.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional

from werkzeug.security import generate_password_hash

from bootstrapper.errors import CreationFailed, DependencyMissing
from bootstrapper.models import User
from bootstrapper.seeds.templates import UserTemplate
from bootstrapper.utils.validation import password_problems
from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def check_passwords(ctx: ProvisionContext) -> int:
    """Log a warning per template password that violates the policy; returns the count."""
    weak = 0
    for tpl in ctx.loader.users:
        problems = password_problems(tpl.password, ctx.config.password_policy)
        if problems:
            weak += 1
            log.warning('password for user %s does not meet policy: %s', tpl.username, ', '.join(problems))
    return weak


def assign_user_role(ctx: ProvisionContext, user: User, tpl: UserTemplate, tenant_id: Optional[int]) -> int:
    """Global and tenant-scoped assignment of the template role; returns new assignments."""
    role = ctx.store.roles.get_by_key(tpl.role)
    if role is None:
        raise DependencyMissing(f"role '{tpl.role}' for user '{tpl.username}' not found")
    assigned = int(ctx.store.assign_role(user, role))
    if tenant_id is not None:
        assigned += int(ctx.store.assign_role(user, role, tenant_id))
    return assigned


def _ensure_membership(ctx: ProvisionContext, user: User, tenant_id: int):
    if not ctx.store.user_tenants.count(user_id=user.id, tenant_id=tenant_id):
        ctx.store.user_tenants.create(user_id=user.id, tenant_id=tenant_id)


def create_users(ctx: ProvisionContext) -> int:
    tenant = ctx.require_default_tenant()
    check_passwords(ctx)
    created = 0
    for tpl in ctx.loader.users:
        if ctx.store.users.get_by_key(tpl.username) is not None:
            log.debug('user %s already exists, skipping', tpl.username)
            continue
        user = ctx.store.users.create(
            username=tpl.username,
            email=tpl.email,
            phone=tpl.phone or None,
            display_name=tpl.display_name or tpl.username,
            password_hash=generate_password_hash(tpl.password),
            is_admin=tpl.is_admin,
            is_certified=tpl.is_certified,
            is_active=True,
        )
        _ensure_membership(ctx, user, tenant.id)
        assign_user_role(ctx, user, tpl, tenant.id)
        if tpl.employee is not None:
            emp = tpl.employee
            ctx.store.employees.create(
                user_id=user.id,
                tenant_id=tenant.id,
                employee_id=emp.employee_id,
                department=emp.department,
                position=emp.position,
                manager_id=None,
                employment_type=emp.employment_type,
                status=emp.status,
                hire_date=_parse_date(emp.hire_date),
            )
        created += 1
    resolve_managers(ctx)
    check_required_users(ctx)
    return created


def resolve_managers(ctx: ProvisionContext) -> int:
    """Point each employee's manager_id at the user named in its template."""
    resolved = 0
    for tpl in ctx.loader.users:
        if tpl.employee is None or not tpl.employee.manager:
            continue
        user = ctx.store.users.get_by_key(tpl.username)
        employee = ctx.store.employees.get_by_key(user.id) if user is not None else None
        if employee is None:
            continue
        manager = ctx.store.users.get_by_key(tpl.employee.manager)
        if manager is None:
            log.warning('manager %s for employee %s not found, leaving unset', tpl.employee.manager, tpl.username)
            continue
        if employee.manager_id != manager.id:
            employee.manager_id = manager.id
            resolved += 1
    if resolved:
        ctx.store.session.flush()
        log.info('resolved %d employee manager reference(s)', resolved)
    return resolved


def check_required_users(ctx: ProvisionContext):
    missing: List[str] = [u for u in ctx.profile.required_usernames if ctx.store.users.get_by_key(u) is None]
    if missing:
        raise CreationFailed('user', ', '.join(missing))


def verify_user_roles(ctx: ProvisionContext) -> int:
    """Re-assign template roles missing globally or within the default tenant."""
    tenant = ctx.default_tenant()
    tenant_id = tenant.id if tenant is not None else None
    repaired = 0
    for tpl in ctx.loader.users:
        user = ctx.store.users.get_by_key(tpl.username)
        if user is None:
            continue
        role = ctx.store.roles.get_by_key(tpl.role)
        if role is None:
            log.warning('role %s for user %s not found, cannot repair', tpl.role, tpl.username)
            continue
        scopes = [None] if tenant_id is None else [None, tenant_id]
        if all(ctx.store.user_roles.count(user_id=user.id, role_id=role.id, tenant_id=t) for t in scopes):
            continue
        repaired += assign_user_role(ctx, user, tpl, tenant_id)
    repaired += resolve_managers(ctx)
    return repaired


def check(ctx: ProvisionContext) -> int:
    return run_guarded(
        'users',
        count=ctx.store.users.count,
        create=lambda: create_users(ctx),
        verify=lambda: verify_user_roles(ctx),
    )


__all__ = [
    'check_passwords', 'assign_user_role', 'create_users', 'resolve_managers', 'check_required_users',
    'verify_user_roles', 'check',
]
