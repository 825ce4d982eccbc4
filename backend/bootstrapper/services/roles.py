from __future__ import annotations
import logging
from typing import Iterable, Tuple

from bootstrapper.models import Role
from bootstrapper.seeds.templates import RoleTemplate
from .context import ProvisionContext
from .guard import run_guarded
from .permissions import verify_role_permissions

log = logging.getLogger(__name__)


def ensure_role(ctx: ProvisionContext, tpl: RoleTemplate, is_system: bool = True) -> Tuple[Role, bool]:
    role = ctx.store.roles.get_by_key(tpl.slug)
    if role is not None:
        return role, False
    role = ctx.store.roles.create(
        name=tpl.name,
        slug=tpl.slug,
        description=tpl.description,
        disabled=tpl.disabled,
        is_system=is_system,
    )
    return role, True


def create_roles(ctx: ProvisionContext, templates: Iterable[RoleTemplate] = None, is_system: bool = True) -> int:
    created = 0
    for tpl in (ctx.loader.roles if templates is None else templates):
        _, was_created = ensure_role(ctx, tpl, is_system)
        if was_created:
            created += 1
        else:
            log.debug('role %s already exists, skipping', tpl.slug)
    return created


def check(ctx: ProvisionContext) -> int:
    return run_guarded(
        'roles',
        count=ctx.store.roles.count,
        create=lambda: create_roles(ctx),
        verify=lambda: verify_role_permissions(ctx),
    )


__all__ = ['ensure_role', 'create_roles', 'check']
