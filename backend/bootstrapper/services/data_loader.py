"""Mode selection and read-only access to seed data.

One DataLoader type, three instances (website, company, enterprise). Selection is a
pure function of the mode; unknown modes fall back to website, never an error.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType, ModuleType
from typing import Dict, Mapping, Sequence, Tuple, Union

from bootstrapper.seeds import website, company, enterprise
from bootstrapper.seeds.templates import (
    RoleTemplate, PermissionTemplate, UserTemplate, TenantTemplate, OptionTemplate, DictionaryTemplate,
    MenuTree, OrgStructure, ModeProfile,
)


class Mode(str, Enum):
    WEBSITE = 'website'
    COMPANY = 'company'
    ENTERPRISE = 'enterprise'

    @classmethod
    def parse(cls, value: Union[str, 'Mode', None]) -> 'Mode':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or '').strip().lower())
        except ValueError:
            return cls.WEBSITE


@dataclass(frozen=True)
class DataLoader:
    mode: Mode
    roles: Tuple[RoleTemplate, ...]
    permissions: Tuple[PermissionTemplate, ...]
    role_permissions: Mapping[str, Tuple[str, ...]]
    policy_rules: Tuple[Sequence[str], ...]
    inheritance_rules: Tuple[Sequence[str], ...]
    users: Tuple[UserTemplate, ...]
    tenants: Tuple[TenantTemplate, ...]
    options: Tuple[OptionTemplate, ...]
    dictionaries: Tuple[DictionaryTemplate, ...]
    menus: MenuTree
    organization: OrgStructure
    profile: ModeProfile

    @classmethod
    def from_module(cls, mode: Mode, module: ModuleType) -> 'DataLoader':
        def get(name, default=()):
            return getattr(module, name, default)

        return cls(
            mode=mode,
            roles=tuple(get('ROLES')),
            permissions=tuple(get('PERMISSIONS')),
            role_permissions=MappingProxyType({k: tuple(v) for k, v in get('ROLE_PERMISSIONS', {}).items()}),
            policy_rules=tuple(tuple(r) for r in get('POLICY_RULES')),
            inheritance_rules=tuple(tuple(r) for r in get('INHERITANCE_RULES')),
            users=tuple(get('USERS')),
            tenants=tuple(get('TENANTS')),
            options=tuple(get('OPTIONS')),
            dictionaries=tuple(get('DICTIONARIES')),
            menus=get('MENUS', MenuTree()),
            organization=get('ORGANIZATION', OrgStructure()),
            profile=get('PROFILE', ModeProfile(mode=mode.value, default_tenant_slug=mode.value)),
        )

    # Lookup helpers used by provisioners and the validator
    def role_slugs(self) -> set:
        return {r.slug for r in self.roles}

    def permission_names(self) -> set:
        return {p.name for p in self.permissions}

    def user(self, username: str):
        return next((u for u in self.users if u.username == username), None)


_LOADERS: Dict[Mode, DataLoader] = {
    Mode.WEBSITE: DataLoader.from_module(Mode.WEBSITE, website),
    Mode.COMPANY: DataLoader.from_module(Mode.COMPANY, company),
    Mode.ENTERPRISE: DataLoader.from_module(Mode.ENTERPRISE, enterprise),
}


def get_data_loader(mode: Union[str, Mode, None]) -> DataLoader:
    return _LOADERS[Mode.parse(mode)]


__all__ = ['Mode', 'DataLoader', 'get_data_loader']
