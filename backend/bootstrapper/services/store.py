"""Thin repository layer over the SQLAlchemy session.

Every entity kind gets the same four calls: count, create, get_by_key and list.
Filters are keyword equality matches; a None value matches SQL NULL.
Nothing here commits. Callers own the transaction boundary.
"""
from __future__ import annotations
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from bootstrapper.errors import CreationFailed
from bootstrapper.models import (
    Role, Permission, RolePermission, User, UserRole, UserTenant, Employee, PolicyRule,
    Tenant, Organization, UserOrganization, Menu, Option, Dictionary,
)

log = logging.getLogger(__name__)

T = TypeVar('T')


class Repository(Generic[T]):
    def __init__(self, session, model: Type[T], kind: str, key: str):
        self.session = session
        self.model = model
        self.kind = kind
        self.key = key

    def _conditions(self, filters):
        conds = []
        for name, value in filters.items():
            column = getattr(self.model, name)
            conds.append(column.is_(None) if value is None else column == value)
        return conds

    def count(self, **filters) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._conditions(filters))
        return int(self.session.execute(stmt).scalar_one())

    def get(self, **filters) -> Optional[T]:
        stmt = select(self.model).where(*self._conditions(filters)).order_by(self.model.id)
        return self.session.execute(stmt).scalars().first()

    def get_by_key(self, key: Any, **scope) -> Optional[T]:
        return self.get(**{self.key: key}, **scope)

    def list(self, **filters) -> List[T]:
        stmt = select(self.model).where(*self._conditions(filters)).order_by(self.model.id)
        return list(self.session.execute(stmt).scalars().all())

    def create(self, **values) -> T:
        obj = self.model(**values)
        try:
            self.session.add(obj)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise CreationFailed(self.kind, values.get(self.key), exc) from exc
        log.debug('created %s %s', self.kind, values.get(self.key))
        return obj


class Store:
    """All repositories the provisioners need, bound to one session."""

    def __init__(self, session):
        self.session = session
        self.roles: Repository[Role] = Repository(session, Role, 'role', 'slug')
        self.permissions: Repository[Permission] = Repository(session, Permission, 'permission', 'name')
        self.role_permissions: Repository[RolePermission] = Repository(session, RolePermission, 'role permission', 'permission_id')
        self.users: Repository[User] = Repository(session, User, 'user', 'username')
        self.user_roles: Repository[UserRole] = Repository(session, UserRole, 'user role', 'role_id')
        self.user_tenants: Repository[UserTenant] = Repository(session, UserTenant, 'user tenant', 'tenant_id')
        self.employees: Repository[Employee] = Repository(session, Employee, 'employee', 'user_id')
        self.tenants: Repository[Tenant] = Repository(session, Tenant, 'tenant', 'slug')
        self.menus: Repository[Menu] = Repository(session, Menu, 'menu', 'slug')
        self.options: Repository[Option] = Repository(session, Option, 'option', 'name')
        self.dictionaries: Repository[Dictionary] = Repository(session, Dictionary, 'dictionary', 'slug')
        self.organizations: Repository[Organization] = Repository(session, Organization, 'organization', 'slug')
        self.user_organizations: Repository[UserOrganization] = Repository(session, UserOrganization, 'user organization', 'organization_id')
        self.policy_rules: Repository[PolicyRule] = Repository(session, PolicyRule, 'policy rule', 'v0')

    # --- assignments ---
    def permissions_for_role(self, role_id: int) -> List[Permission]:
        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def assign_permission(self, role: Role, permission: Permission) -> bool:
        if self.role_permissions.count(role_id=role.id, permission_id=permission.id):
            return False
        self.role_permissions.create(role_id=role.id, permission_id=permission.id)
        return True

    def assign_role(self, user: User, role: Role, tenant_id: Optional[int] = None) -> bool:
        if self.user_roles.count(user_id=user.id, role_id=role.id, tenant_id=tenant_id):
            return False
        self.user_roles.create(user_id=user.id, role_id=role.id, tenant_id=tenant_id)
        return True

    def roles_for_user(self, user_id: int) -> List[Role]:
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.id)
        )
        return list(self.session.execute(stmt).scalars().unique().all())

    # --- system options (tenant_id NULL) ---
    def get_option(self, name: str) -> Optional[str]:
        row = self.options.get_by_key(name, tenant_id=None)
        return row.value if row is not None else None

    def set_option(self, name: str, value: str, type: str = 'object') -> Option:
        row = self.options.get_by_key(name, tenant_id=None)
        if row is None:
            return self.options.create(name=name, value=value, type=type, autoload=False, tenant_id=None)
        row.value = value
        try:
            self.session.flush()
        except SQLAlchemyError as exc:
            raise CreationFailed('option', name, exc) from exc
        return row

    def option_names(self, prefix: str) -> List[str]:
        stmt = (
            select(Option.name)
            .where(Option.tenant_id.is_(None), Option.name.like(f"{prefix}%"))
            .order_by(Option.name)
        )
        return list(self.session.execute(stmt).scalars().all())

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()


__all__ = ['Repository', 'Store']
