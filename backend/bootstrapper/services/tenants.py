from __future__ import annotations
import logging

from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def create_tenants(ctx: ProvisionContext) -> int:
    created = 0
    for tpl in ctx.loader.tenants:
        if ctx.store.tenants.get_by_key(tpl.slug) is not None:
            log.debug('tenant %s already exists, skipping', tpl.slug)
            continue
        ctx.store.tenants.create(
            name=tpl.name,
            slug=tpl.slug,
            type=tpl.type,
            title=tpl.title or tpl.name,
            url=tpl.url,
            description=tpl.description,
            settings=dict(tpl.settings),
            quotas=dict(tpl.quotas),
        )
        created += 1
    if ctx.default_tenant() is None:
        log.warning('default tenant %s is not part of the %s seed data', ctx.profile.default_tenant_slug, ctx.loader.mode.value)
    return created


def check(ctx: ProvisionContext) -> int:
    return run_guarded('tenants', count=ctx.store.tenants.count, create=lambda: create_tenants(ctx))


__all__ = ['create_tenants', 'check']
