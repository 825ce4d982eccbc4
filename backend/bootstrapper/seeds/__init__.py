"""Literal seed tables, one module per mode.

Each mode module exposes ROLES, PERMISSIONS, ROLE_PERMISSIONS, POLICY_RULES,
INHERITANCE_RULES, USERS, TENANTS, OPTIONS, DICTIONARIES, MENUS, ORGANIZATION and
PROFILE. Read them through bootstrapper.services.data_loader, not directly.
"""
