from __future__ import annotations
import logging
from typing import Dict

from bootstrapper.errors import SeedDataInvalid
from bootstrapper.models import Tenant
from bootstrapper.seeds.menus import REQUIRED_HEADERS
from bootstrapper.seeds.templates import MenuTree
from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)


def verify_menu_data(tree: MenuTree):
    """Raise SeedDataInvalid when a required header is absent from the tree."""
    headers = {m.slug for m in tree.headers}
    missing = [slug for slug in REQUIRED_HEADERS if slug not in headers]
    if missing:
        raise SeedDataInvalid(f"required menu headers missing: {', '.join(missing)}")


def create_menus(ctx: ProvisionContext, tenant: Tenant) -> int:
    tree = ctx.loader.menus
    verify_menu_data(tree)
    creator = ctx.admin_user()
    ids: Dict[str, int] = {}
    created = 0
    for tier, menus in tree.tiers():
        tier_created = 0
        for tpl in menus:
            parent_id = None
            if tpl.parent:
                parent_id = ids.get(tpl.parent)
                if parent_id is None:
                    parent = ctx.store.menus.get_by_key(tpl.parent, tenant_id=tenant.id)
                    parent_id = parent.id if parent is not None else None
                if parent_id is None:
                    log.warning('parent menu %s for %s not found, skipping', tpl.parent, tpl.slug)
                    continue
            existing = ctx.store.menus.get_by_key(tpl.slug, tenant_id=tenant.id)
            if existing is not None:
                ids[tpl.slug] = existing.id
                continue
            row = ctx.store.menus.create(
                tenant_id=tenant.id,
                parent_id=parent_id,
                name=tpl.name,
                slug=tpl.slug,
                type=tpl.type,
                path=tpl.path,
                icon=tpl.icon,
                sort_order=tpl.order,
                permission=tpl.permission,
                hidden=tpl.hidden,
                created_by=creator.id,
            )
            ids[tpl.slug] = row.id
            tier_created += 1
        log.debug('created %d %s menu(s)', tier_created, tier)
        created += tier_created
    return created


def check(ctx: ProvisionContext) -> int:
    tenant = ctx.require_default_tenant()
    return run_guarded(
        'menus',
        count=lambda: ctx.store.menus.count(tenant_id=tenant.id),
        create=lambda: create_menus(ctx, tenant),
    )


__all__ = ['verify_menu_data', 'create_menus', 'check']
