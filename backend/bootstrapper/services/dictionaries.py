from __future__ import annotations
import logging

from bootstrapper.models import Tenant
from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def create_dictionaries(ctx: ProvisionContext, tenant: Tenant) -> int:
    created = 0
    for tpl in ctx.loader.dictionaries:
        if ctx.store.dictionaries.get_by_key(tpl.slug, tenant_id=tenant.id) is not None:
            continue
        ctx.store.dictionaries.create(
            tenant_id=tenant.id,
            name=tpl.name,
            slug=tpl.slug,
            type=tpl.type,
            value=tpl.value,
            description=tpl.description,
        )
        created += 1
    return created


def check(ctx: ProvisionContext) -> int:
    tenant = ctx.require_default_tenant()
    return run_guarded(
        'dictionaries',
        count=lambda: ctx.store.dictionaries.count(tenant_id=tenant.id),
        create=lambda: create_dictionaries(ctx, tenant),
    )


__all__ = ['create_dictionaries', 'check']
