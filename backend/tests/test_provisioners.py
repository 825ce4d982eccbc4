import dataclasses
import pytest
from sqlalchemy import delete
from bootstrapper.config.initialization import PasswordPolicy
from bootstrapper.errors import CreationFailed, DependencyMissing, SeedDataInvalid
from bootstrapper.models import RolePermission, Employee, UserRole
from bootstrapper.seeds.templates import MenuTemplate, MenuTree, UserTemplate
from bootstrapper.services import (
    roles, permissions, tenants, users, menus, options, dictionaries, organizations,
)
from bootstrapper.services.context import ProvisionContext
from bootstrapper.services.data_loader import get_data_loader
from bootstrapper.services.guard import run_guarded


def _closure(ctx):
    for step in (roles.check, permissions.check, tenants.check, users.check):
        step(ctx)
    ctx.store.commit()


def test_guard_skips_when_rows_exist():
    calls = []
    assert run_guarded('things', count=lambda: 3, create=lambda: calls.append('create') or 1) == 0
    assert calls == []


def test_guard_creates_when_empty():
    assert run_guarded('things', count=lambda: 0, create=lambda: 4, verify=lambda: 99) == 4


def test_guard_runs_verification_when_rows_exist():
    assert run_guarded('things', count=lambda: 2, create=lambda: 4, verify=lambda: 1) == 1


def test_roles_and_permissions_created_once(make_context, store):
    ctx = make_context('website')
    assert roles.check(ctx) == 5
    assert permissions.check(ctx) == len(ctx.loader.permissions)
    assert roles.check(ctx) == 0
    assert permissions.check(ctx) == 0
    editor = store.roles.get_by_key('editor')
    assert {p.name for p in store.permissions_for_role(editor.id)} == set(ctx.loader.role_permissions['editor'])


def test_missing_role_permission_is_repaired(make_context, store, session):
    ctx = make_context('company')
    _closure(ctx)
    role = store.roles.get_by_key('department-manager')
    session.execute(delete(RolePermission).where(RolePermission.role_id == role.id))
    session.flush()
    assert permissions.role_permission_gaps(ctx) == {'department-manager': set(ctx.loader.role_permissions['department-manager'])}
    assert roles.check(ctx) == 5
    assert permissions.role_permission_gaps(ctx) == {}


def test_tenants_created_with_settings(make_context, store):
    ctx = make_context('enterprise')
    assert tenants.check(ctx) == 4
    hq = store.tenants.get_by_key('digital-enterprise')
    assert hq.settings['crossCompanyReports'] is True
    assert hq.quotas['companies'] == 20


def test_users_need_default_tenant(make_context):
    ctx = make_context('website')
    roles.check(ctx)
    with pytest.raises(DependencyMissing):
        users.check(ctx)


def test_users_get_global_and_tenant_roles(make_context, store):
    ctx = make_context('website')
    _closure(ctx)
    tenant = store.tenants.get_by_key('website')
    editor = store.users.get_by_key('editor')
    role = store.roles.get_by_key('editor')
    assert store.user_roles.count(user_id=editor.id, role_id=role.id, tenant_id=None) == 1
    assert store.user_roles.count(user_id=editor.id, role_id=role.id, tenant_id=tenant.id) == 1
    assert store.user_tenants.count(user_id=editor.id, tenant_id=tenant.id) == 1
    assert editor.verify_password('Ac123456')
    assert editor.is_certified is True
    assert store.employees.count() == 0


def test_employee_manager_back_references(make_context, store):
    ctx = make_context('company')
    _closure(ctx)
    by_name = {u: store.users.get_by_key(u) for u in ('company.admin', 'hr.manager', 'tech.lead', 'senior.developer')}
    emp = {u: store.employees.get_by_key(user.id) for u, user in by_name.items()}
    assert emp['senior.developer'].manager_id == by_name['tech.lead'].id
    assert emp['tech.lead'].manager_id == by_name['company.admin'].id
    assert emp['hr.manager'].manager_id == by_name['company.admin'].id
    assert emp['company.admin'].manager_id is None
    assert emp['tech.lead'].position == 'Technical Lead'
    assert emp['tech.lead'].hire_date.year == 2024


def test_lost_manager_link_restored_by_verification(make_context, store, session):
    ctx = make_context('company')
    _closure(ctx)
    dev = store.users.get_by_key('senior.developer')
    store.employees.get_by_key(dev.id).manager_id = None
    session.flush()
    assert users.check(ctx) == 1
    assert store.employees.get_by_key(dev.id).manager_id == store.users.get_by_key('tech.lead').id


def test_lost_tenant_role_restored_by_verification(make_context, store, session):
    ctx = make_context('company')
    _closure(ctx)
    lead = store.users.get_by_key('tech.lead')
    role = store.roles.get_by_key('department-manager')
    tenant = store.tenants.get_by_key('digital-company')
    session.execute(delete(UserRole).where(
        UserRole.user_id == lead.id, UserRole.role_id == role.id, UserRole.tenant_id == tenant.id))
    session.flush()
    assert store.user_roles.count(user_id=lead.id, role_id=role.id, tenant_id=None) == 1
    assert users.check(ctx) == 1
    assert store.user_roles.count(user_id=lead.id, role_id=role.id, tenant_id=tenant.id) == 1


def test_manager_declared_after_employee_is_resolved(make_context, store):
    base = get_data_loader('company')
    reordered = dataclasses.replace(base, users=tuple(reversed(base.users)))
    ctx = ProvisionContext(store=store, loader=reordered)
    _closure(ctx)
    dev = store.users.get_by_key('senior.developer')
    assert store.employees.get_by_key(dev.id).manager_id == store.users.get_by_key('tech.lead').id


def test_missing_required_user_fails(make_context, store):
    base = get_data_loader('company')
    trimmed = dataclasses.replace(base, users=tuple(u for u in base.users if u.username != 'company.admin'))
    ctx = ProvisionContext(store=store, loader=trimmed)
    roles.check(ctx)
    tenants.check(ctx)
    with pytest.raises(CreationFailed) as exc:
        users.check(ctx)
    assert 'company.admin' in str(exc.value)


def test_unknown_user_role_is_a_missing_dependency(make_context, store):
    ctx = make_context('website')
    _closure(ctx)
    user = store.users.get_by_key('editor')
    tpl = UserTemplate('editor', 'editor@website.local', 'Ac123456', 'phantom')
    with pytest.raises(DependencyMissing):
        users.assign_user_role(ctx, user, tpl, None)


def test_weak_template_passwords_only_warn(make_context, store):
    ctx = make_context('website', password_policy=PasswordPolicy(min_length=12, require_special=True))
    assert users.check_passwords(ctx) == 3
    roles.check(ctx)
    tenants.check(ctx)
    assert users.check(ctx) == 3


def test_required_menu_headers_enforced():
    with pytest.raises(SeedDataInvalid) as exc:
        menus.verify_menu_data(MenuTree(headers=(MenuTemplate('Dashboard', 'dashboard', 'header'),)))
    assert 'system' in str(exc.value)


def test_menus_created_parents_first(make_context, store):
    ctx = make_context('website')
    _closure(ctx)
    tenant = store.tenants.get_by_key('website')
    assert menus.check(ctx) == len(ctx.loader.menus.all())
    users_menu = store.menus.get_by_key('system-users', tenant_id=tenant.id)
    assert users_menu.parent_id == store.menus.get_by_key('system', tenant_id=tenant.id).id
    assert users_menu.created_by == store.users.get_by_key('super').id
    assert store.menus.get_by_key('system-user-create', tenant_id=tenant.id).hidden is True
    assert menus.check(ctx) == 0


def test_menu_with_dangling_parent_is_skipped(make_context, store):
    ctx = make_context('website')
    _closure(ctx)
    tree = MenuTree(
        headers=(MenuTemplate('Dashboard', 'dashboard', 'header'), MenuTemplate('System', 'system', 'header')),
        sidebars=(MenuTemplate('Orphan', 'orphan', 'sidebar', parent='nowhere'),),
    )
    ctx = dataclasses.replace(ctx, loader=dataclasses.replace(ctx.loader, menus=tree))
    assert menus.create_menus(ctx, store.tenants.get_by_key('website')) == 2
    assert store.menus.get_by_key('orphan') is None


def test_options_and_dictionaries_are_tenant_scoped(make_context, store):
    ctx = make_context('company')
    _closure(ctx)
    tenant = store.tenants.get_by_key('digital-company')
    assert options.check(ctx) == len(ctx.loader.options)
    assert dictionaries.check(ctx) == len(ctx.loader.dictionaries)
    assert store.options.get_by_key('system.name', tenant_id=tenant.id).value == 'Company Platform'
    assert store.dictionaries.get_by_key('employment_type', tenant_id=tenant.id) is not None
    assert options.check(ctx) == 0


def test_company_organization_structure(make_context, store):
    ctx = make_context('company')
    _closure(ctx)
    tenant = store.tenants.get_by_key('digital-company')
    assert organizations.check(ctx) == 10
    store.commit()
    technology = store.organizations.get_by_key('technology', tenant_id=tenant.id)
    backend = store.organizations.get_by_key('backend-dev', tenant_id=tenant.id)
    assert backend.parent_id == technology.id
    assert technology.created_by == store.users.get_by_key('company.admin').id

    director = store.roles.get_by_key('company-director')
    assert director.is_system is False
    assert {p.name for p in store.permissions_for_role(director.id)} == {'Organization Management', 'Employee Management'}

    lead = store.users.get_by_key('tech.lead')
    assert store.user_organizations.count(user_id=lead.id, organization_id=technology.id) == 1
    head = store.roles.get_by_key('department-head')
    assert store.user_roles.count(user_id=lead.id, role_id=head.id, tenant_id=tenant.id) == 1
    assert organizations.check(ctx) == 0


def test_organizations_need_their_owner(make_context):
    ctx = make_context('company')
    roles.check(ctx)
    tenants.check(ctx)
    with pytest.raises(DependencyMissing):
        organizations.check(ctx)


def test_enterprise_subsidiaries_share_department_layout(make_context, store):
    ctx = make_context('enterprise')
    _closure(ctx)
    organizations.check(ctx)
    tenant = store.tenants.get_by_key('digital-enterprise')
    for company in ('techcorp', 'mediacorp', 'consultcorp'):
        parent = store.organizations.get_by_key(company, tenant_id=tenant.id)
        hr = store.organizations.get_by_key(f'{company}-hr', tenant_id=tenant.id)
        assert hr.parent_id == parent.id
        assert store.organizations.get_by_key(f'{company}-facilities', tenant_id=tenant.id) is not None


def test_employee_rows_count(make_context, session):
    ctx = make_context('enterprise')
    _closure(ctx)
    assert session.query(Employee).count() == len(ctx.loader.users)
