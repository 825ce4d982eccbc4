"""Company mode: one company tenant with departments, teams and an employee hierarchy."""
from __future__ import annotations

from .templates import (
    RoleTemplate as R, PermissionTemplate as P, UserTemplate, EmployeeTemplate as E, TenantTemplate,
    OrgNode as N, OrgStructure, ModeProfile,
)
from .common import CORE_PERMISSIONS, DEFAULT_PASSWORD, BASE_DICTIONARIES, BUSINESS_DICTIONARIES, system_options
from .menus import BUSINESS_MENUS

ROLES = (
    R('Super Administrator', 'super-admin', 'Unrestricted system access'),
    R('System Administrator', 'system-admin', 'Platform configuration and access control'),
    R('Company Administrator', 'company-admin', 'Company-wide administration'),
    R('HR Manager', 'hr-manager', 'Employee lifecycle management'),
    R('Department Manager', 'department-manager', 'Department-level management with team oversight'),
    R('Team Leader', 'team-leader', 'Team coordination'),
    R('Employee', 'employee', 'Regular employee'),
)

PERMISSIONS = CORE_PERMISSIONS + (
    P('Profile Management', 'manage', 'profile', 'Manage own profile'),
    P('Employee Management', 'manage', 'employee', 'Full employee management'),
    P('Employee Read', 'read', 'employee', 'View employee information'),
    P('Employee Update', 'update', 'employee', 'Update employee information'),
    P('Organization Management', 'manage', 'organization', 'Organization structure management'),
    P('Group Management', 'manage', 'group', 'Group management'),
    P('Group Read', 'read', 'group', 'View group information'),
    P('Workflow Management', 'manage', 'workflow', 'Design and run approval processes'),
    P('Task Management', 'manage', 'task', 'Handle workflow tasks'),
)

ROLE_PERMISSIONS = {
    'super-admin': ('Super Admin Access',),
    'system-admin': (
        'System Management', 'User Management', 'Role Management', 'Permission Management', 'Menu Management',
        'Dictionary Management', 'Tenant Management', 'Organization Management', 'Group Management', 'Dashboard Access',
    ),
    'company-admin': (
        'User Management', 'Employee Management', 'Organization Management', 'Group Management',
        'Workflow Management', 'Dashboard Access', 'Profile Management',
    ),
    'hr-manager': ('Employee Management', 'User Read', 'Dashboard Access', 'Profile Management'),
    'department-manager': ('Employee Management', 'User Read', 'Group Read', 'Task Management', 'Dashboard Access'),
    'team-leader': ('Employee Read', 'User Read', 'Task Management', 'Dashboard Access'),
    'employee': ('Dashboard Access', 'Profile Management'),
}

POLICY_RULES = (
    ('super-admin', '*', '*', '*', '', ''),
    ('system-admin', '*', '/sys/*', '*', '', ''),
    ('system-admin', '*', '/iam/*', '*', '', ''),
    ('system-admin', '*', '/access/*', '*', '', ''),
    ('company-admin', '*', '/org/*', '*', '', ''),
    ('company-admin', '*', '/sys/menus', 'GET', '', ''),
    ('hr-manager', '*', '/org/employees', '*', '', ''),
    ('department-manager', '*', '/org/orgs', 'GET', '', ''),
    ('team-leader', '*', '/workflow/tasks', 'GET', '', ''),
    ('employee', '*', '/iam/account', 'GET', '', ''),
    ('employee', '*', '/sys/dictionaries', 'GET', '', ''),
)

INHERITANCE_RULES = (
    ('super-admin', 'system-admin', '*'),
    ('system-admin', 'company-admin', '*'),
    ('company-admin', 'department-manager', '*'),
    ('department-manager', 'team-leader', '*'),
    ('team-leader', 'employee', '*'),
)

USERS = (
    UserTemplate('super', 'super@company.local', DEFAULT_PASSWORD, 'super-admin',
                 display_name='Super Administrator', phone='13800138000', is_admin=True,
                 employee=E('EMP000', position='Super Administrator', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('admin', 'admin@company.local', DEFAULT_PASSWORD, 'system-admin',
                 display_name='System Administrator', phone='13800138010', is_admin=True,
                 employee=E('EMP001', position='System Administrator', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('company.admin', 'company.admin@company.local', DEFAULT_PASSWORD, 'company-admin',
                 display_name='Company Administrator', phone='13800138001', is_admin=True,
                 employee=E('EMP002', 'management', 'Company Administrator', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('hr.manager', 'hr.manager@company.local', DEFAULT_PASSWORD, 'hr-manager',
                 display_name='HR Manager', phone='13800138002',
                 employee=E('EMP003', 'human-resources', 'HR Manager', 'company.admin', hire_date='2024-01-15T09:00:00Z')),
    UserTemplate('tech.lead', 'tech.lead@company.local', DEFAULT_PASSWORD, 'department-manager',
                 display_name='Technical Lead', phone='13800138004',
                 employee=E('EMP004', 'technology', 'Technical Lead', 'company.admin', hire_date='2024-02-01T09:00:00Z')),
    UserTemplate('senior.developer', 'senior.dev@company.local', DEFAULT_PASSWORD, 'employee',
                 display_name='Senior Developer', phone='13800138005',
                 employee=E('EMP005', 'technology', 'Senior Developer', 'tech.lead', hire_date='2024-02-15T09:00:00Z')),
)

TENANTS = (
    TenantTemplate('Digital Company', 'digital-company', type='private', title='Digital Company',
                   url='https://company.local', description='Default company space',
                   settings={'theme': 'light', 'locale': 'en-US', 'workweek': [1, 2, 3, 4, 5]},
                   quotas={'users': 500, 'storage_mb': 51200, 'departments': 50}),
)

OPTIONS = system_options('Company Platform', 'Single company management platform')
DICTIONARIES = BASE_DICTIONARIES + BUSINESS_DICTIONARIES
MENUS = BUSINESS_MENUS

ORGANIZATION = OrgStructure(
    roots=(
        N('Digital Company', 'digital-company', 'company', 'Company headquarters', children=(
            N('Management', 'management', 'department', 'Executive management'),
            N('Technology Department', 'technology', 'department', 'Software development and technical operations', children=(
                N('Backend Development', 'backend-dev', 'team', 'Server-side development team'),
                N('Frontend Development', 'frontend-dev', 'team', 'Client-side development team'),
                N('QA Engineering', 'qa-engineering', 'team', 'Quality assurance and testing'),
            )),
            N('Product Management', 'product-management', 'department', 'Product strategy and design', children=(
                N('UX/UI Design', 'ux-ui-design', 'team', 'User experience and interface design'),
            )),
            N('Human Resources', 'human-resources', 'department', 'Human resources management'),
            N('Finance & Accounting', 'finance', 'department', 'Financial management and accounting'),
        )),
    ),
    roles=(
        R('Company Director', 'company-director', 'Company-level leadership'),
        R('Department Head', 'department-head', 'Department leadership and oversight'),
    ),
    role_permissions={
        'company-director': ('Organization Management', 'Employee Management'),
        'department-head': ('Employee Update', 'Group Read'),
    },
    members={
        'company.admin': ('digital-company', 'management'),
        'hr.manager': ('human-resources',),
        'tech.lead': ('technology',),
        'senior.developer': ('backend-dev',),
    },
    position_roles={
        'Company Administrator': 'company-director',
        'Technical Lead': 'department-head',
        'HR Manager': 'department-head',
    },
)

PROFILE = ModeProfile(
    mode='company',
    default_tenant_slug='digital-company',
    admin_usernames=('super', 'admin', 'company.admin'),
    required_usernames=('super', 'admin', 'company.admin'),
    organization_owner='company.admin',
)
