"""Template records consumed by the provisioners.

All templates are frozen; seed modules build tuples of them at import time and the
DataLoader hands them out unchanged.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


@dataclass(frozen=True)
class RoleTemplate:
    name: str
    slug: str
    description: str = ''
    disabled: bool = False


@dataclass(frozen=True)
class PermissionTemplate:
    name: str
    action: str
    subject: str
    description: str = ''
    disabled: bool = False

    @property
    def code(self) -> str:
        return f"{self.action}:{self.subject}"


@dataclass(frozen=True)
class EmployeeTemplate:
    employee_id: str
    department: str = ''
    position: str = ''
    # Username of the manager, resolved to a user id after all users exist
    manager: Optional[str] = None
    employment_type: str = 'full_time'
    status: str = 'active'
    hire_date: Optional[str] = None


@dataclass(frozen=True)
class UserTemplate:
    username: str
    email: str
    password: str
    role: str
    display_name: str = ''
    phone: str = ''
    is_admin: bool = False
    is_certified: bool = True
    employee: Optional[EmployeeTemplate] = None


@dataclass(frozen=True)
class TenantTemplate:
    name: str
    slug: str
    type: str = 'private'
    title: str = ''
    url: str = ''
    description: str = ''
    settings: Dict[str, Any] = field(default_factory=dict, hash=False)
    quotas: Dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class OptionTemplate:
    name: str
    value: str
    type: str = 'string'
    autoload: bool = True


@dataclass(frozen=True)
class DictionaryTemplate:
    name: str
    slug: str
    value: str
    type: str = 'object'
    description: str = ''


@dataclass(frozen=True)
class MenuTemplate:
    name: str
    slug: str
    type: str
    path: str = ''
    icon: str = ''
    order: int = 0
    parent: Optional[str] = None
    permission: Optional[str] = None
    hidden: bool = False


@dataclass(frozen=True)
class MenuTree:
    headers: Tuple[MenuTemplate, ...] = ()
    sidebars: Tuple[MenuTemplate, ...] = ()
    submenus: Tuple[MenuTemplate, ...] = ()
    accounts: Tuple[MenuTemplate, ...] = ()
    tenants: Tuple[MenuTemplate, ...] = ()

    def tiers(self) -> Iterator[Tuple[str, Tuple[MenuTemplate, ...]]]:
        """Yield (tier name, menus) in creation order; parents always precede children."""
        yield 'headers', self.headers
        yield 'sidebars', self.sidebars
        yield 'submenus', self.submenus
        yield 'accounts', self.accounts
        yield 'tenants', self.tenants

    def all(self) -> Tuple[MenuTemplate, ...]:
        return self.headers + self.sidebars + self.submenus + self.accounts + self.tenants


@dataclass(frozen=True)
class OrgNode:
    name: str
    slug: str
    type: str = 'department'
    description: str = ''
    children: Tuple['OrgNode', ...] = ()

    def walk(self, parent: Optional[str] = None) -> Iterator[Tuple[Optional[str], 'OrgNode']]:
        """Depth-first (parent slug, node) pairs, parents first."""
        yield parent, self
        for child in self.children:
            yield from child.walk(self.slug)


@dataclass(frozen=True)
class OrgStructure:
    roots: Tuple[OrgNode, ...] = ()
    roles: Tuple[RoleTemplate, ...] = ()
    role_permissions: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)
    members: Mapping[str, Tuple[str, ...]] = field(default_factory=dict, hash=False)
    position_roles: Mapping[str, str] = field(default_factory=dict, hash=False)

    def nodes(self) -> Iterator[Tuple[Optional[str], OrgNode]]:
        for root in self.roots:
            yield from root.walk()

    @property
    def is_empty(self) -> bool:
        return not self.roots and not self.roles


@dataclass(frozen=True)
class ModeProfile:
    """Per-mode facts every provisioner needs, resolved once per run."""
    mode: str
    default_tenant_slug: str
    admin_usernames: Tuple[str, ...] = ()
    required_usernames: Tuple[str, ...] = ()
    organization_owner: Optional[str] = None


__all__ = [
    'RoleTemplate', 'PermissionTemplate', 'EmployeeTemplate', 'UserTemplate', 'TenantTemplate',
    'OptionTemplate', 'DictionaryTemplate', 'MenuTemplate', 'MenuTree', 'OrgNode', 'OrgStructure',
    'ModeProfile',
]
