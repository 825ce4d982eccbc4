"""Enterprise mode: a group headquarters with several subsidiary companies."""
from __future__ import annotations
from typing import Tuple

from .templates import (
    RoleTemplate as R, PermissionTemplate as P, UserTemplate, EmployeeTemplate as E, TenantTemplate,
    OrgNode as N, OrgStructure, ModeProfile,
)
from .common import CORE_PERMISSIONS, DEFAULT_PASSWORD, BASE_DICTIONARIES, BUSINESS_DICTIONARIES, system_options
from .menus import BUSINESS_MENUS

ROLES = (
    R('Super Administrator', 'super-admin', 'Super administrator with unrestricted system access'),
    R('System Administrator', 'system-admin', 'System administrator with full platform management capabilities'),
    R('Enterprise Administrator', 'enterprise-admin', 'Enterprise-wide administrative access across all subsidiaries'),
    R('Tenant Administrator', 'tenant-admin', 'Tenant-level administrative access within specific tenant'),
    R('HR Manager', 'hr-manager', 'Human resources management with employee lifecycle control'),
    R('Finance Manager', 'finance-manager', 'Financial management with budget and payment oversight'),
    R('Department Manager', 'department-manager', 'Department-level management with team oversight responsibilities'),
    R('Team Leader', 'team-leader', 'Team leadership and coordination'),
    R('Employee', 'employee', 'Regular employee with standard access'),
    R('Contractor', 'contractor', 'External contractor with limited access'),
    R('Intern', 'intern', 'Intern with read-only access'),
)

PERMISSIONS = CORE_PERMISSIONS + (
    P('User Create', 'create', 'user', 'Create new users'),
    P('User Update', 'update', 'user', 'Update user information'),
    P('User Delete', 'delete', 'user', 'Delete users'),
    P('Employee Management', 'manage', 'employee', 'Manage employee records'),
    P('Organization Management', 'manage', 'organization', 'Manage organizational structure'),
    P('Financial Management', 'manage', 'finance', 'Manage financial records and transactions'),
    P('HR Management', 'manage', 'hr', 'Human resources management'),
    P('Enterprise Overview', 'read', 'enterprise', 'View enterprise-wide information'),
    P('Cross Company Access', 'read', 'cross-company', 'Access information across multiple companies'),
    P('Group Management', 'manage', 'group', 'Full group management access'),
    P('Group Read', 'read', 'group', 'View group information'),
    P('Department Management', 'manage', 'department', 'Full department management access'),
    P('Department Read', 'read', 'department', 'View department information'),
    P('Team Management', 'manage', 'team', 'Full team management access'),
    P('Team Read', 'read', 'team', 'View team information'),
)

ROLE_PERMISSIONS = {
    'super-admin': ('Super Admin Access',),
    'system-admin': (
        'System Management', 'Tenant Management', 'User Management', 'Employee Management', 'Organization Management',
        'Role Management', 'Permission Management', 'Menu Management', 'Dictionary Management', 'Dashboard Access',
        'Group Management', 'Department Management', 'Team Management',
    ),
    'enterprise-admin': (
        'User Management', 'Employee Management', 'Organization Management', 'Financial Management', 'HR Management',
        'Dashboard Access', 'Enterprise Overview', 'Cross Company Access', 'Group Management',
        'Department Management', 'Team Management',
    ),
    'tenant-admin': (
        'User Read', 'User Create', 'User Update', 'Employee Management', 'Dashboard Access',
        'Group Read', 'Department Read', 'Team Read',
    ),
    'hr-manager': ('Employee Management', 'HR Management', 'User Read', 'Dashboard Access', 'Department Read', 'Team Read'),
    'finance-manager': ('Financial Management', 'Employee Management', 'Dashboard Access', 'Department Read', 'Team Read'),
    'department-manager': ('User Read', 'Employee Management', 'Dashboard Access', 'Department Management', 'Team Management'),
    'team-leader': ('User Read', 'Dashboard Access', 'Team Read'),
    'employee': ('Dashboard Access',),
    'contractor': ('Dashboard Access',),
    'intern': ('Dashboard Access',),
}

POLICY_RULES = (
    ('super-admin', '*', '*', '*', '', ''),
    ('system-admin', '*', '/', 'GET', '', ''),
    ('system-admin', '*', '/sys/*', '*', '', ''),
    ('system-admin', '*', '/iam/*', '*', '', ''),
    ('system-admin', '*', '/org/*', '*', '', ''),
    ('system-admin', '*', '/flow/*', '*', '', ''),
    ('enterprise-admin', '*', '/', 'GET', '', ''),
    ('enterprise-admin', '*', '/account', 'GET', '', ''),
    ('enterprise-admin', '*', '/account/spaces', 'GET', '', ''),
    ('enterprise-admin', '*', '/sys/users', '*', '', ''),
    ('enterprise-admin', '*', '/sys/employees', '*', '', ''),
    ('enterprise-admin', '*', '/sys/menus', 'GET', '', ''),
    ('enterprise-admin', '*', '/org/orgs', '*', '', ''),
    ('tenant-admin', '*', '/sys/users', 'GET', '', ''),
    ('hr-manager', '*', '/sys/employees', '*', '', ''),
    ('finance-manager', '*', '/pay/*', '*', '', ''),
    ('department-manager', '*', '/org/orgs', 'GET', '', ''),
    ('team-leader', '*', '/flow/tasks', 'GET', '', ''),
    ('employee', '*', '/account', 'GET', '', ''),
    ('contractor', '*', '/sys/dictionaries', 'GET', '', ''),
    ('intern', '*', '/cms/topics', 'GET', '', ''),
)

INHERITANCE_RULES = (
    ('super-admin', 'system-admin', '*'),
    ('system-admin', 'enterprise-admin', '*'),
    ('enterprise-admin', 'department-manager', '*'),
    ('department-manager', 'team-leader', '*'),
    ('team-leader', 'employee', '*'),
)

USERS = (
    UserTemplate('super', 'super@enterprise.com', DEFAULT_PASSWORD, 'super-admin',
                 display_name='Super Administrator', phone='13800138000', is_admin=True,
                 employee=E('EMP000', position='Super Administrator', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('admin', 'admin@enterprise.com', DEFAULT_PASSWORD, 'system-admin',
                 display_name='System Administrator', phone='13800138010', is_admin=True,
                 employee=E('EMP001', position='System Administrator', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('chief.executive', 'ceo@enterprise.com', DEFAULT_PASSWORD, 'enterprise-admin',
                 display_name='Chief Executive Officer', phone='13800138001', is_admin=True,
                 employee=E('EMP002', 'executive', 'Chief Executive Officer', hire_date='2024-01-01T09:00:00Z')),
    UserTemplate('hr.manager', 'hr.manager@enterprise.com', DEFAULT_PASSWORD, 'hr-manager',
                 display_name='HR Manager', phone='13800138002',
                 employee=E('EMP003', 'human-resources', 'HR Manager', 'chief.executive', hire_date='2024-01-15T09:00:00Z')),
    UserTemplate('finance.manager', 'finance.manager@enterprise.com', DEFAULT_PASSWORD, 'finance-manager',
                 display_name='Finance Manager', phone='13800138003',
                 employee=E('EMP004', 'finance', 'Finance Manager', 'chief.executive', hire_date='2024-01-15T09:00:00Z')),
    UserTemplate('tech.lead', 'tech.lead@techcorp.com', DEFAULT_PASSWORD, 'department-manager',
                 display_name='Technical Lead', phone='13800138004',
                 employee=E('EMP005', 'technology', 'Technical Lead', 'chief.executive', hire_date='2024-02-01T09:00:00Z')),
    UserTemplate('senior.developer', 'senior.dev@techcorp.com', DEFAULT_PASSWORD, 'employee',
                 display_name='Senior Developer', phone='13800138005',
                 employee=E('EMP006', 'technology', 'Senior Developer', 'tech.lead', hire_date='2024-02-15T09:00:00Z')),
    UserTemplate('marketing.manager', 'marketing.manager@mediacorp.com', DEFAULT_PASSWORD, 'department-manager',
                 display_name='Marketing Manager', phone='13800138006',
                 employee=E('EMP007', 'marketing', 'Marketing Manager', 'chief.executive', hire_date='2024-02-01T09:00:00Z')),
    UserTemplate('content.creator', 'content.creator@mediacorp.com', DEFAULT_PASSWORD, 'employee',
                 display_name='Content Creator', phone='13800138007',
                 employee=E('EMP008', 'marketing', 'Content Creator', 'marketing.manager', 'contract', hire_date='2024-03-01T09:00:00Z')),
)

_QUOTAS = {'users': 200, 'storage_mb': 20480}

TENANTS = (
    TenantTemplate('Digital Enterprise Group', 'digital-enterprise', type='private', title='Digital Enterprise',
                   url='https://enterprise.com', description='Enterprise headquarters space',
                   settings={'theme': 'light', 'locale': 'en-US', 'crossCompanyReports': True},
                   quotas={'users': 5000, 'storage_mb': 512000, 'companies': 20}),
    TenantTemplate('TechCorp Solutions', 'techcorp', description='Technology solutions and software development',
                   settings={'locale': 'en-US'}, quotas=dict(_QUOTAS)),
    TenantTemplate('MediaCorp Digital', 'mediacorp', description='Digital media and content creation services',
                   settings={'locale': 'en-US'}, quotas=dict(_QUOTAS)),
    TenantTemplate('ConsultCorp Advisory', 'consultcorp', description='Business consulting and advisory services',
                   settings={'locale': 'en-US'}, quotas=dict(_QUOTAS)),
)

OPTIONS = system_options('Digital Enterprise Platform', 'Multi-space digital enterprise management and collaboration platform')
DICTIONARIES = BASE_DICTIONARIES + BUSINESS_DICTIONARIES
MENUS = BUSINESS_MENUS


def _shared_departments(company: str) -> Tuple[N, ...]:
    """Departments every subsidiary carries, slugs prefixed with the company slug."""
    return (
        N('Human Resources', f'{company}-hr', 'department', 'Human resources management', children=(
            N('Recruitment', f'{company}-recruitment', 'team', 'Talent acquisition'),
            N('Employee Relations', f'{company}-employee-relations', 'team', 'Employee support and relations'),
        )),
        N('Finance & Accounting', f'{company}-finance', 'department', 'Financial management and accounting', children=(
            N('Accounting', f'{company}-accounting', 'team', 'Financial accounting'),
            N('Financial Planning', f'{company}-financial-planning', 'team', 'Budget and planning'),
        )),
        N('Operations', f'{company}-operations', 'department', 'Operational management and support', children=(
            N('Administration', f'{company}-administration', 'team', 'Administrative support'),
            N('Facilities', f'{company}-facilities', 'team', 'Facilities management'),
        )),
    )


def _company(name: str, slug: str, description: str, departments: Tuple[N, ...]) -> N:
    return N(name, slug, 'company', description, children=departments + _shared_departments(slug))


ORGANIZATION = OrgStructure(
    roots=(
        N('Digital Enterprise Group', 'digital-enterprise', 'enterprise', 'Multi-tenant digital enterprise management platform', children=(
            N('Executive Office', 'executive-office', 'headquarters', 'Executive leadership and strategic management'),
            N('Corporate HR', 'corporate-hr', 'headquarters', 'Enterprise-wide human resources management'),
            N('Corporate Finance', 'corporate-finance', 'headquarters', 'Enterprise financial management and control'),
            N('Corporate IT', 'corporate-it', 'headquarters', 'Enterprise IT infrastructure and services'),
            _company('TechCorp Solutions', 'techcorp', 'Technology solutions and software development', (
                N('Technology Department', 'technology', 'department', 'Software development and technical operations', children=(
                    N('Backend Development', 'backend-dev', 'team', 'Server-side development team'),
                    N('Frontend Development', 'frontend-dev', 'team', 'Client-side development team'),
                    N('DevOps', 'devops', 'team', 'Development operations and infrastructure'),
                    N('QA Engineering', 'qa-engineering', 'team', 'Quality assurance and testing'),
                )),
                N('Product Management', 'product-management', 'department', 'Product strategy and management', children=(
                    N('Product Strategy', 'product-strategy', 'team', 'Product planning and roadmap'),
                    N('UX/UI Design', 'ux-ui-design', 'team', 'User experience and interface design'),
                )),
            )),
            _company('MediaCorp Digital', 'mediacorp', 'Digital media and content creation services', (
                N('Content Production', 'content-production', 'department', 'Digital content creation and production', children=(
                    N('Video Production', 'video-production', 'team', 'Video content creation'),
                    N('Editorial', 'editorial', 'team', 'Content writing and editing'),
                    N('Graphic Design', 'graphic-design', 'team', 'Visual design and graphics'),
                )),
                N('Digital Marketing', 'digital-marketing', 'department', 'Digital marketing and promotion', children=(
                    N('Social Media', 'social-media', 'team', 'Social media management'),
                    N('SEO/SEM', 'seo-sem', 'team', 'Search engine optimization and marketing'),
                )),
            )),
            _company('ConsultCorp Advisory', 'consultcorp', 'Business consulting and advisory services', (
                N('Business Consulting', 'business-consulting', 'department', 'Strategic business consulting services', children=(
                    N('Strategy Consulting', 'strategy-consulting', 'team', 'Strategic planning and advisory'),
                    N('Process Optimization', 'process-optimization', 'team', 'Business process improvement'),
                )),
            )),
        )),
    ),
    roles=(
        R('Enterprise Executive', 'enterprise-executive', 'Enterprise-level executive leadership'),
        R('Company Director', 'company-director', 'Company-level leadership and management'),
        R('Department Head', 'department-head', 'Department leadership and oversight'),
        R('Team Supervisor', 'team-supervisor', 'Team supervision and coordination'),
    ),
    role_permissions={
        'enterprise-executive': ('System Management', 'Organization Management', 'Financial Management', 'HR Management'),
        'company-director': ('Organization Management', 'Department Management', 'Employee Management'),
        'department-head': ('Department Management', 'Team Management', 'Employee Management'),
        'team-supervisor': ('Team Management', 'Team Read'),
    },
    members={
        'chief.executive': ('digital-enterprise', 'executive-office'),
        'hr.manager': ('corporate-hr',),
        'finance.manager': ('corporate-finance',),
        'tech.lead': ('technology',),
        'senior.developer': ('backend-dev',),
        'marketing.manager': ('digital-marketing',),
        'content.creator': ('content-production',),
    },
    position_roles={
        'Chief Executive Officer': 'enterprise-executive',
        'HR Manager': 'department-head',
        'Finance Manager': 'department-head',
        'Technical Lead': 'department-head',
        'Marketing Manager': 'department-head',
    },
)

PROFILE = ModeProfile(
    mode='enterprise',
    default_tenant_slug='digital-enterprise',
    admin_usernames=('super', 'admin', 'chief.executive'),
    required_usernames=('super', 'admin', 'chief.executive'),
    organization_owner='chief.executive',
)
