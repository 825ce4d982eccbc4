from .authz import Base, Permission, Role, RolePermission, User, UserRole, UserTenant, Employee, PolicyRule
from .tenancy import Tenant, Organization, UserOrganization
from .system import Menu, Option, Dictionary
from .audit import AuditLog

__all__ = [
    'Base', 'Permission', 'Role', 'RolePermission', 'User', 'UserRole', 'UserTenant', 'Employee', 'PolicyRule',
    'Tenant', 'Organization', 'UserOrganization', 'Menu', 'Option', 'Dictionary', 'AuditLog',
]
