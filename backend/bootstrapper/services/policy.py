"""Policy compilation into casbin_rules.

Three passes, each idempotent:

  dynamic      p(role.slug, tenant, path, method) for every enabled permission
               assigned to a role, mapped through constants.policy
  static       literal p rows from seed data (4 to 6 fields)
  inheritance  literal g rows (child, parent, domain)

Every rule is looked up by its full key before insert. Each pass commits on its own;
a failing pass is rolled back and logged while the remaining passes still run.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from bootstrapper.constants.policy import WILDCARD, map_permission
from bootstrapper.errors import InitializationError, MalformedSeedRow
from .context import ProvisionContext
from .guard import run_guarded

log = logging.getLogger(__name__)

POLICY_KEY = ('ptype', 'v0', 'v1', 'v2', 'v3', 'v4', 'v5')
INHERITANCE_KEY = ('ptype', 'v0', 'v1', 'v2')


def build_policy_rule(row: Sequence[str]) -> Dict[str, Optional[str]]:
    if len(row) < 4:
        raise MalformedSeedRow('policy', row, 4)
    return {
        'ptype': 'p',
        'v0': row[0],
        'v1': row[1],
        'v2': row[2],
        'v3': row[3],
        # empty optional fields are stored as NULL
        'v4': row[4] if len(row) > 4 and row[4] else None,
        'v5': row[5] if len(row) > 5 and row[5] else None,
    }


def build_inheritance_rule(row: Sequence[str]) -> Dict[str, Optional[str]]:
    if len(row) < 3:
        raise MalformedSeedRow('inheritance', row, 3)
    return {'ptype': 'g', 'v0': row[0], 'v1': row[1], 'v2': row[2], 'v3': None, 'v4': None, 'v5': None}


def ensure_rule(ctx: ProvisionContext, rule: Dict[str, Optional[str]], key: Tuple[str, ...] = POLICY_KEY) -> bool:
    """Insert `rule` unless a row with the same key fields exists; True when inserted."""
    if ctx.store.policy_rules.count(**{k: rule[k] for k in key}):
        return False
    ctx.store.policy_rules.create(**rule)
    return True


def policy_domain(ctx: ProvisionContext) -> str:
    tenant = ctx.default_tenant()
    if tenant is None:
        log.warning('default tenant %s not found, using wildcard domain', ctx.profile.default_tenant_slug)
        return WILDCARD
    return str(tenant.id)


def compile_dynamic(ctx: ProvisionContext) -> int:
    domain = policy_domain(ctx)
    created = 0
    for role in ctx.store.roles.list():
        permissions = ctx.store.permissions_for_role(role.id)
        if not permissions:
            log.debug('role %s has no permissions, skipping dynamic policies', role.slug)
            continue
        role_created = 0
        for permission in permissions:
            if permission.disabled:
                continue
            path, method = map_permission(permission.subject, permission.action)
            if not path or not method:
                log.debug('could not map permission %s:%s', permission.action, permission.subject)
                continue
            rule = {'ptype': 'p', 'v0': role.slug, 'v1': domain, 'v2': path, 'v3': method, 'v4': None, 'v5': None}
            if ensure_rule(ctx, rule):
                role_created += 1
        if role_created:
            log.debug('created %d dynamic policies for role %s', role_created, role.slug)
        created += role_created
    return created


def compile_static(ctx: ProvisionContext, rows: Optional[Iterable[Sequence[str]]] = None) -> int:
    created = 0
    for row in (ctx.loader.policy_rules if rows is None else rows):
        try:
            rule = build_policy_rule(row)
        except MalformedSeedRow as exc:
            log.warning('%s', exc)
            continue
        if ensure_rule(ctx, rule):
            created += 1
    return created


def compile_inheritance(ctx: ProvisionContext, rows: Optional[Iterable[Sequence[str]]] = None) -> int:
    created = 0
    for row in (ctx.loader.inheritance_rules if rows is None else rows):
        try:
            rule = build_inheritance_rule(row)
        except MalformedSeedRow as exc:
            log.warning('%s', exc)
            continue
        if ensure_rule(ctx, rule, INHERITANCE_KEY):
            created += 1
    return created


PASSES: Tuple[Tuple[str, Callable[[ProvisionContext], int]], ...] = (
    ('dynamic', compile_dynamic),
    ('static', compile_static),
    ('inheritance', compile_inheritance),
)


@dataclass
class PolicySummary:
    counts: Dict[str, int] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self):
        return {**self.counts, 'total': self.total, 'failed': list(self.failed)}


def compile_policies(ctx: ProvisionContext) -> PolicySummary:
    summary = PolicySummary()
    for name, run in PASSES:
        try:
            summary.counts[name] = run(ctx)
            ctx.store.commit()
        except (InitializationError, SQLAlchemyError) as exc:
            ctx.store.rollback()
            summary.counts[name] = 0
            summary.failed.append(name)
            log.error('%s policy pass failed: %s', name, exc)
    log.info(
        'policy compilation completed: %d dynamic + %d static + %d inheritance = %d total',
        summary.counts.get('dynamic', 0), summary.counts.get('static', 0),
        summary.counts.get('inheritance', 0), summary.total,
    )
    return summary


def check(ctx: ProvisionContext) -> int:
    return run_guarded('policies', count=ctx.store.policy_rules.count, create=lambda: compile_policies(ctx).total)


__all__ = [
    'build_policy_rule', 'build_inheritance_rule', 'ensure_rule', 'policy_domain', 'compile_dynamic',
    'compile_static', 'compile_inheritance', 'compile_policies', 'PolicySummary', 'check',
]
