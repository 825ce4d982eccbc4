"""Advisory cross-checks between the seed tables of one mode.

Findings never block provisioning; the orchestrator logs them and carries on.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from typing import List

from bootstrapper.errors import ValidationWarning
from bootstrapper.constants.policy import WILDCARD
from .data_loader import DataLoader

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Finding:
    check: str
    message: str

    def to_dict(self):
        return asdict(self)

    def __str__(self):
        return f"[{self.check}] {self.message}"


def validate_seed_data(loader: DataLoader) -> List[Finding]:
    findings: List[Finding] = []
    permissions = loader.permission_names()
    roles = loader.role_slugs()
    org_roles = {r.slug for r in loader.organization.roles}
    all_roles = roles | org_roles

    for menu in loader.menus.all():
        if menu.permission and menu.permission not in permissions:
            findings.append(Finding('menu_permission', f"menu '{menu.slug}' requires unknown permission '{menu.permission}'"))

    for source, mapping, known in (
        ('role_permission', loader.role_permissions, roles),
        ('organization_role_permission', loader.organization.role_permissions, org_roles | roles),
    ):
        for role_slug, names in mapping.items():
            if role_slug not in known:
                findings.append(Finding(source, f"permission mapping references unknown role '{role_slug}'"))
            for name in names:
                if name not in permissions:
                    findings.append(Finding(source, f"role '{role_slug}' references unknown permission '{name}'"))

    for row in loader.policy_rules:
        if row and row[0] != WILDCARD and row[0] not in all_roles:
            findings.append(Finding('policy_role', f"policy rule {list(row)} references unknown role '{row[0]}'"))

    for row in loader.inheritance_rules:
        for slug in row[:2]:
            if slug != WILDCARD and slug not in all_roles:
                findings.append(Finding('inheritance_role', f"inheritance rule {list(row)} references unknown role '{slug}'"))

    for user in loader.users:
        if user.role not in roles:
            findings.append(Finding('user_role', f"user '{user.username}' references unknown role '{user.role}'"))

    return findings


def check_seed_data(loader: DataLoader) -> List[Finding]:
    """Raise ValidationWarning carrying every finding; returns [] when consistent."""
    findings = validate_seed_data(loader)
    if findings:
        raise ValidationWarning(findings)
    log.debug('%s seed data consistent', loader.mode.value)
    return findings


__all__ = ['Finding', 'validate_seed_data', 'check_seed_data']
