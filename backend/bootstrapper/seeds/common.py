"""Seed rows shared by every mode."""
from __future__ import annotations
import json
from typing import Iterable, Tuple

from .templates import PermissionTemplate, OptionTemplate, DictionaryTemplate

DEFAULT_PASSWORD = 'Ac123456'

# Every menu permission reference resolves against this set, whatever the mode
CORE_PERMISSIONS: Tuple[PermissionTemplate, ...] = (
    PermissionTemplate('Super Admin Access', '*', '*', 'Super administrator wildcard permission'),
    PermissionTemplate('Dashboard Access', 'read', 'dashboard', 'Access to dashboard and analytics'),
    PermissionTemplate('System Management', 'manage', 'system', 'Manage system settings and configuration'),
    PermissionTemplate('User Management', 'manage', 'user', 'Create, update, and delete users'),
    PermissionTemplate('User Read', 'read', 'user', 'View user information'),
    PermissionTemplate('Role Management', 'manage', 'role', 'Create and manage roles'),
    PermissionTemplate('Permission Management', 'manage', 'permission', 'Manage permissions and access control'),
    PermissionTemplate('Menu Management', 'manage', 'menu', 'Menu structure management'),
    PermissionTemplate('Dictionary Management', 'manage', 'dictionary', 'Dictionary data management'),
    PermissionTemplate('Tenant Management', 'manage', 'tenant', 'Create, update, and delete tenants'),
)


def _json(value) -> str:
    return json.dumps(value, separators=(',', ':'), sort_keys=True)


def system_options(name: str, description: str, extra: Iterable[OptionTemplate] = ()) -> Tuple[OptionTemplate, ...]:
    base = (
        OptionTemplate('system.name', name),
        OptionTemplate('system.description', description),
        OptionTemplate('system.theme', _json({
            'primaryColor': '#1890ff', 'layout': 'side', 'contentWidth': 'fluid', 'fixedHeader': True,
            'title': name, 'logo': '/logo.png', 'darkMode': False,
        }), type='object'),
        OptionTemplate('system.storage', _json({'type': 'local', 'local': {'directory': 'uploads'}}), type='object'),
        OptionTemplate('system.security', _json({
            'passwordMinLength': 8, 'passwordComplexity': True, 'loginAttempts': 5, 'lockoutDuration': 30,
            'sessionTimeout': 480, 'mfaRequired': False, 'auditLogging': True,
        }), type='object'),
        OptionTemplate('system.defaults', _json({
            'language': 'en-US', 'timezone': 'UTC', 'dateFormat': 'YYYY-MM-DD', 'timeFormat': 'HH:mm:ss',
        }), type='object'),
    )
    return base + tuple(extra)


BASE_DICTIONARIES: Tuple[DictionaryTemplate, ...] = (
    DictionaryTemplate('User Status', 'user_status', _json({'active': 'Active', 'inactive': 'Inactive', 'pending': 'Pending', 'locked': 'Locked'}),
                       description='System user status enumeration'),
    DictionaryTemplate('Gender', 'gender', _json({'male': 'Male', 'female': 'Female', 'other': 'Other'}), description='Gender options'),
    DictionaryTemplate('File Size Unit', 'file_size_unit', _json({'B': 'Bytes', 'KB': 'Kilobytes', 'MB': 'Megabytes', 'GB': 'Gigabytes'}),
                       description='File size units'),
    DictionaryTemplate('Role Type', 'role_type', _json({'system': 'System Role', 'organization': 'Organization Role', 'custom': 'Custom Role'}),
                       description='System role types'),
    DictionaryTemplate('Menu Type', 'menu_type', _json({'header': 'Header', 'sidebar': 'Sidebar', 'submenu': 'Submenu', 'account': 'Account', 'tenant': 'Tenant'}),
                       description='Menu tiers'),
    DictionaryTemplate('Priority', 'priority', _json({'low': 'Low', 'medium': 'Medium', 'high': 'High', 'urgent': 'Urgent'}),
                       description='Task or ticket priority levels'),
)

BUSINESS_DICTIONARIES: Tuple[DictionaryTemplate, ...] = (
    DictionaryTemplate('Employment Type', 'employment_type', _json({'full_time': 'Full Time', 'part_time': 'Part Time', 'contract': 'Contract', 'intern': 'Intern'}),
                       description='Employee contract kinds'),
    DictionaryTemplate('Organization Type', 'organization_type', _json({'enterprise': 'Enterprise', 'company': 'Company', 'department': 'Department', 'team': 'Team'}),
                       description='Organization node kinds'),
)

__all__ = ['DEFAULT_PASSWORD', 'CORE_PERMISSIONS', 'system_options', 'BASE_DICTIONARIES', 'BUSINESS_DICTIONARIES']
