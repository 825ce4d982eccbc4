"""Website mode: a single tenant site with editors and members, no organization tree."""
from __future__ import annotations

from .templates import (
    RoleTemplate as R, PermissionTemplate as P, UserTemplate, TenantTemplate, OrgStructure, ModeProfile,
)
from .common import CORE_PERMISSIONS, DEFAULT_PASSWORD, BASE_DICTIONARIES, system_options
from .menus import WEBSITE_MENUS

ROLES = (
    R('Super Administrator', 'super-admin', 'Unrestricted access to the whole site'),
    R('System Administrator', 'system-admin', 'Site configuration and user management'),
    R('Editor', 'editor', 'Publishes and curates content'),
    R('Member', 'member', 'Registered member of the site'),
    R('Guest', 'guest', 'Anonymous visitor'),
)

PERMISSIONS = CORE_PERMISSIONS + (
    P('Content Management', 'manage', 'content', 'Create, update, and delete content'),
    P('Content Read', 'read', 'content', 'View published content'),
    P('Taxonomy Management', 'manage', 'taxonomy', 'Manage categories and tags'),
    P('Resource Management', 'manage', 'resource', 'Manage uploaded files'),
    P('Account Access', 'read', 'account', 'View own account'),
)

ROLE_PERMISSIONS = {
    'super-admin': ('Super Admin Access',),
    'system-admin': (
        'System Management', 'User Management', 'Role Management', 'Permission Management',
        'Menu Management', 'Dictionary Management', 'Tenant Management', 'Dashboard Access',
    ),
    'editor': ('Content Management', 'Content Read', 'Taxonomy Management', 'Resource Management', 'Dashboard Access'),
    'member': ('Content Read', 'Account Access', 'Dashboard Access'),
    'guest': ('Content Read',),
}

POLICY_RULES = (
    ('super-admin', '*', '*', '*', '', ''),
    ('system-admin', '*', '/sys/*', '*', '', ''),
    ('system-admin', '*', '/iam/*', '*', '', ''),
    ('editor', '*', '/content/*', '*', '', ''),
    ('member', '*', '/iam/account', 'GET', '', ''),
    ('guest', '*', '/content/topics', 'GET', '', ''),
)

INHERITANCE_RULES = (
    ('super-admin', 'system-admin', '*'),
    ('system-admin', 'editor', '*'),
    ('editor', 'member', '*'),
    ('member', 'guest', '*'),
)

USERS = (
    UserTemplate('super', 'super@website.local', DEFAULT_PASSWORD, 'super-admin',
                 display_name='Super Administrator', phone='13800138000', is_admin=True),
    UserTemplate('admin', 'admin@website.local', DEFAULT_PASSWORD, 'system-admin',
                 display_name='Site Administrator', phone='13800138010', is_admin=True),
    UserTemplate('editor', 'editor@website.local', DEFAULT_PASSWORD, 'editor',
                 display_name='Content Editor', phone='13800138020'),
)

TENANTS = (
    TenantTemplate('Website', 'website', type='public', title='Website', url='https://website.local',
                   description='Default website space',
                   settings={'theme': 'light', 'locale': 'en-US', 'allowRegistration': True},
                   quotas={'users': 1000, 'storage_mb': 10240}),
)

OPTIONS = system_options('Website', 'Content website')
DICTIONARIES = BASE_DICTIONARIES
MENUS = WEBSITE_MENUS
ORGANIZATION = OrgStructure()

PROFILE = ModeProfile(
    mode='website',
    default_tenant_slug='website',
    admin_usernames=('super', 'admin'),
    required_usernames=('super', 'admin'),
    organization_owner=None,
)
