"""initial bootstrap tables

Revision ID: 0001_initial_bootstrap
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_initial_bootstrap'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True)


def upgrade():
    op.create_table('permissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False, unique=True),
        sa.Column('action', sa.String(length=32), nullable=False),
        sa.Column('subject', sa.String(length=64), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('disabled', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        _timestamps(),
    )
    op.create_index('ix_permissions_name', 'permissions', ['name'])
    op.create_index('ix_permissions_subject', 'permissions', ['subject'])

    op.create_table('roles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False, unique=True),
        sa.Column('disabled', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        sa.Column('description', sa.String(length=255), nullable=True),
        _timestamps(),
    )
    op.create_index('ix_roles_slug', 'roles', ['slug'])

    op.create_table('tenants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False, unique=True),
        sa.Column('type', sa.String(length=32), nullable=True),
        sa.Column('title', sa.String(length=128), nullable=True),
        sa.Column('url', sa.String(length=255), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        sa.Column('quotas', sa.JSON(), nullable=True),
        _timestamps(),
    )
    op.create_index('ix_tenants_slug', 'tenants', ['slug'])

    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False, unique=True),
        sa.Column('email', sa.String(length=128), nullable=False, unique=True),
        sa.Column('phone', sa.String(length=32)),
        sa.Column('display_name', sa.String(length=128), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_certified', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        _timestamps(),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table('role_permissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('permission_id', sa.Integer(), sa.ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('role_id', 'permission_id', name='uq_role_permission'),
    )

    op.create_table('user_roles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.UniqueConstraint('user_id', 'role_id', 'tenant_id', name='uq_user_role'),
    )

    op.create_table('user_tenants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('user_id', 'tenant_id', name='uq_user_tenant'),
    )

    op.create_table('employees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employee_id', sa.String(length=32), nullable=False),
        sa.Column('department', sa.String(length=64), nullable=True),
        sa.Column('position', sa.String(length=128), nullable=True),
        sa.Column('manager_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('employment_type', sa.String(length=32), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=True),
        sa.Column('hire_date', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_employees_tenant_id', 'employees', ['tenant_id'])

    op.create_table('casbin_rules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ptype', sa.String(length=8), nullable=False),
        sa.Column('v0', sa.String(length=255), nullable=False),
        sa.Column('v1', sa.String(length=255), nullable=False),
        sa.Column('v2', sa.String(length=255), nullable=False),
        sa.Column('v3', sa.String(length=255), nullable=True),
        sa.Column('v4', sa.String(length=255), nullable=True),
        sa.Column('v5', sa.String(length=255), nullable=True),
    )
    op.create_index('ix_casbin_rules_ptype', 'casbin_rules', ['ptype'])
    op.create_index('ix_casbin_rules_v0', 'casbin_rules', ['v0'])

    op.create_table('organizations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.UniqueConstraint('tenant_id', 'slug', name='uq_organization_slug'),
    )
    op.create_index('ix_organizations_tenant_id', 'organizations', ['tenant_id'])

    op.create_table('user_organizations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('user_id', 'organization_id', name='uq_user_organization'),
    )

    op.create_table('menus',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('menus.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('path', sa.String(length=255), nullable=True),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=True),
        sa.Column('permission', sa.String(length=128), nullable=True),
        sa.Column('hidden', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.UniqueConstraint('tenant_id', 'slug', name='uq_menu_slug'),
    )
    op.create_index('ix_menus_tenant_id', 'menus', ['tenant_id'])

    op.create_table('options',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=True),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('autoload', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_option_name'),
    )
    op.create_index('ix_options_tenant_id', 'options', ['tenant_id'])
    op.create_index('ix_options_name', 'options', ['name'])

    op.create_table('dictionaries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('slug', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=True),
        sa.Column('value', sa.Text(), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.UniqueConstraint('tenant_id', 'slug', name='uq_dictionary_slug'),
    )
    op.create_index('ix_dictionaries_tenant_id', 'dictionaries', ['tenant_id'])

    op.create_table('audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('action', sa.String(length=64), nullable=False),
        sa.Column('actor_user_id', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('entity', sa.String(length=64), nullable=False, server_default='Initialization'),
        sa.Column('entity_id', sa.String(length=128), nullable=True),
        sa.Column('remote_addr', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_audit_logs_actor_user_id', 'audit_logs', ['actor_user_id'])
    op.create_index('ix_audit_logs_action', 'audit_logs', ['action'])


def downgrade():
    for table in (
        'audit_logs', 'dictionaries', 'options', 'menus', 'user_organizations', 'organizations',
        'casbin_rules', 'employees', 'user_tenants', 'user_roles', 'role_permissions', 'users', 'tenants',
        'roles', 'permissions',
    ):
        op.drop_table(table)
