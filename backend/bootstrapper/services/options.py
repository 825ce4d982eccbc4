from __future__ import annotations
import logging

from bootstrapper.models import Tenant
from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def create_options(ctx: ProvisionContext, tenant: Tenant) -> int:
    created = 0
    for tpl in ctx.loader.options:
        if ctx.store.options.get_by_key(tpl.name, tenant_id=tenant.id) is not None:
            continue
        ctx.store.options.create(tenant_id=tenant.id, name=tpl.name, type=tpl.type, value=tpl.value, autoload=tpl.autoload)
        created += 1
    return created


def check(ctx: ProvisionContext) -> int:
    tenant = ctx.require_default_tenant()
    return run_guarded(
        'options',
        count=lambda: ctx.store.options.count(tenant_id=tenant.id),
        create=lambda: create_options(ctx, tenant),
    )


__all__ = ['create_options', 'check']
