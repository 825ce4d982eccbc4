"""Menu trees. Every permission named here must exist in the mode's permission set."""
from __future__ import annotations

from .templates import MenuTemplate as M, MenuTree

REQUIRED_HEADERS = ('dashboard', 'system')

_DASHBOARD = M('Dashboard', 'dashboard', 'header', '/dashboard', 'IconGauge', 1, permission='Dashboard Access')
_SYSTEM = M('System', 'system', 'header', '/system', 'IconSettings', 99, permission='System Management')

_SYSTEM_SIDEBARS = (
    M('Users', 'system-users', 'sidebar', '/system/users', 'IconUsers', 1, 'system', 'User Management'),
    M('Roles', 'system-roles', 'sidebar', '/system/roles', 'IconShield', 2, 'system', 'Role Management'),
    M('Permissions', 'system-permissions', 'sidebar', '/system/permissions', 'IconKey', 3, 'system', 'Permission Management'),
    M('Menus', 'system-menus', 'sidebar', '/system/menus', 'IconMenu', 4, 'system', 'Menu Management'),
    M('Dictionaries', 'system-dictionaries', 'sidebar', '/system/dictionaries', 'IconBook', 5, 'system', 'Dictionary Management'),
    M('Options', 'system-options', 'sidebar', '/system/options', 'IconAdjustments', 6, 'system', 'System Management'),
    M('Tenants', 'system-tenants', 'sidebar', '/system/tenants', 'IconBuilding', 7, 'system', 'Tenant Management'),
)

_SYSTEM_SUBMENUS = (
    M('User List', 'system-user-list', 'submenu', '/system/users/list', '', 1, 'system-users', 'User Read'),
    M('Create User', 'system-user-create', 'submenu', '/system/users/create', '', 2, 'system-users', 'User Management', hidden=True),
    M('Role List', 'system-role-list', 'submenu', '/system/roles/list', '', 1, 'system-roles', 'Role Management'),
)

_ACCOUNTS = (
    M('Profile', 'account-profile', 'account', '/account/profile', 'IconUser', 1),
    M('Security', 'account-security', 'account', '/account/security', 'IconLock', 2),
    M('My Spaces', 'account-spaces', 'account', '/account/spaces', 'IconLayers', 3),
)

_TENANTS = (
    M('Space Settings', 'tenant-settings', 'tenant', '/tenant/settings', 'IconSettings', 1, permission='Tenant Management'),
    M('Space Members', 'tenant-members', 'tenant', '/tenant/members', 'IconUsers', 2, permission='User Read'),
)

WEBSITE_MENUS = MenuTree(
    headers=(
        _DASHBOARD,
        M('Content', 'content', 'header', '/content', 'IconArticle', 2, permission='Content Read'),
        _SYSTEM,
    ),
    sidebars=_SYSTEM_SIDEBARS + (
        M('Topics', 'content-topics', 'sidebar', '/content/topics', 'IconFileText', 1, 'content', 'Content Read'),
        M('Taxonomies', 'content-taxonomies', 'sidebar', '/content/taxonomies', 'IconTags', 2, 'content', 'Taxonomy Management'),
    ),
    submenus=_SYSTEM_SUBMENUS + (
        M('Publish Topic', 'content-topic-create', 'submenu', '/content/topics/create', '', 1, 'content-topics', 'Content Management'),
    ),
    accounts=_ACCOUNTS,
    tenants=_TENANTS,
)

BUSINESS_MENUS = MenuTree(
    headers=(
        _DASHBOARD,
        M('Organization', 'organization', 'header', '/org', 'IconSitemap', 2, permission='Organization Management'),
        _SYSTEM,
    ),
    sidebars=_SYSTEM_SIDEBARS + (
        M('Employees', 'org-employees', 'sidebar', '/org/employees', 'IconId', 1, 'organization', 'Employee Management'),
        M('Departments', 'org-departments', 'sidebar', '/org/departments', 'IconHierarchy', 2, 'organization', 'Organization Management'),
        M('Groups', 'org-groups', 'sidebar', '/org/groups', 'IconUsersGroup', 3, 'organization', 'Group Management'),
    ),
    submenus=_SYSTEM_SUBMENUS + (
        M('Employee Directory', 'org-employee-directory', 'submenu', '/org/employees/directory', '', 1, 'org-employees', 'Employee Management'),
    ),
    accounts=_ACCOUNTS,
    tenants=_TENANTS,
)

__all__ = ['REQUIRED_HEADERS', 'WEBSITE_MENUS', 'BUSINESS_MENUS']
