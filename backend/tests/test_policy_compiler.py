import pytest
from bootstrapper.constants.policy import map_permission
from bootstrapper.errors import MalformedSeedRow
from bootstrapper.models import PolicyRule
from bootstrapper.services import policy
from bootstrapper.services.data_loader import get_data_loader


@pytest.mark.parametrize('subject,action,expected', [
    ('user', 'read', ('/user/users', 'GET')),
    ('user', 'create', ('/user/users', 'POST')),
    ('role', 'manage', ('/access/roles', '*')),
    ('content', 'delete', ('/content/topics', 'DELETE')),
    ('widget', 'read', ('/widget/*', 'GET')),
    ('user', 'approve', ('/user/users', '*')),
    ('', 'read', ('', '')),
    ('user', '', ('', '')),
])
def test_map_permission(subject, action, expected):
    assert map_permission(subject, action) == expected


def test_build_policy_rule_stores_empty_optionals_as_null():
    rule = policy.build_policy_rule(('editor', '*', '/content/*', '*', '', 'allow'))
    assert rule == {'ptype': 'p', 'v0': 'editor', 'v1': '*', 'v2': '/content/*', 'v3': '*', 'v4': None, 'v5': 'allow'}
    assert policy.build_policy_rule(('editor', '*', '/x', 'GET'))['v4'] is None


def test_short_rows_rejected():
    with pytest.raises(MalformedSeedRow) as exc:
        policy.build_policy_rule(('editor', '*', '/x'))
    assert 'need 4 fields, got 3' in str(exc.value)
    with pytest.raises(MalformedSeedRow):
        policy.build_inheritance_rule(('a', 'b'))


def test_static_pass_skips_malformed_rows(make_context, store):
    ctx = make_context('website')
    rows = [('editor',), ('editor', '*', '/content/*', '*', '', ''), ('member', '*', '/iam/account', 'GET')]
    assert policy.compile_static(ctx, rows) == 2
    assert store.policy_rules.count(ptype='p') == 2
    # second pass finds every rule already present
    assert policy.compile_static(ctx, rows) == 0


def test_inheritance_pass_skips_malformed_rows(make_context, store):
    ctx = make_context('website')
    rows = [('super-admin',), ('super-admin', 'system-admin', '*'), ('super-admin', 'system-admin', '*')]
    assert policy.compile_inheritance(ctx, rows) == 1
    rule = store.policy_rules.get(ptype='g')
    assert (rule.v0, rule.v1, rule.v2, rule.v3) == ('super-admin', 'system-admin', '*', None)


def test_dynamic_pass_uses_wildcard_domain_without_tenant(make_context, store):
    ctx = make_context('website')
    from bootstrapper.services import roles, permissions
    roles.create_roles(ctx)
    permissions.create_permissions(ctx)
    permissions.assign_role_permissions(ctx, {'guest': ('Content Read',)})
    assert policy.compile_dynamic(ctx) == 1
    rule = store.policy_rules.get(ptype='p', v0='guest')
    assert (rule.v1, rule.v2, rule.v3) == ('*', '/content/topics', 'GET')


def test_disabled_permissions_are_not_compiled(make_context, store):
    ctx = make_context('website')
    from bootstrapper.services import roles, permissions
    roles.create_roles(ctx)
    permissions.create_permissions(ctx)
    permissions.assign_role_permissions(ctx, {'guest': ('Content Read',)})
    store.permissions.get_by_key('Content Read').disabled = True
    store.session.flush()
    assert policy.compile_dynamic(ctx) == 0


def _expected_dynamic(loader):
    by_name = {p.name: p for p in loader.permissions}
    rules = set()
    mappings = list(loader.role_permissions.items()) + list(loader.organization.role_permissions.items())
    for slug, names in mappings:
        for name in names:
            perm = by_name[name]
            if perm.disabled:
                continue
            path, method = map_permission(perm.subject, perm.action)
            if path and method:
                rules.add((slug, path, method))
    return rules


@pytest.mark.parametrize('mode', ['website', 'company'])
def test_policy_rule_count_after_execute(make_orchestrator, store, mode):
    orch = make_orchestrator(mode)
    orch.execute()
    loader = get_data_loader(mode)
    tenant = store.tenants.get_by_key(loader.profile.default_tenant_slug)
    dynamic = _expected_dynamic(loader)
    static = {tuple(r[:4]) for r in loader.policy_rules}
    assert store.policy_rules.count(ptype='p', v1=str(tenant.id)) == len(dynamic)
    assert store.policy_rules.count(ptype='p') == len(dynamic) + len(static)
    assert store.policy_rules.count(ptype='g') == len(set(loader.inheritance_rules))


def test_compile_policies_is_idempotent(make_orchestrator, make_context, store):
    make_orchestrator('company').execute()
    before = store.policy_rules.count()
    summary = policy.compile_policies(make_context('company'))
    assert summary.total == 0
    assert summary.failed == []
    assert store.policy_rules.count() == before


def test_failing_pass_does_not_stop_later_passes(make_context, store, monkeypatch):
    ctx = make_context('website')

    def boom(_ctx):
        raise MalformedSeedRow('policy', ('x',), 4)

    monkeypatch.setattr(policy, 'PASSES', (('dynamic', boom),) + policy.PASSES[1:])
    summary = policy.compile_policies(ctx)
    assert summary.failed == ['dynamic']
    assert summary.counts['static'] == len(ctx.loader.policy_rules)
    assert summary.counts['inheritance'] == len(ctx.loader.inheritance_rules)
    assert summary.to_dict()['total'] == summary.total
    assert store.session.query(PolicyRule).count() == summary.total


def test_company_department_manager_employee_rule(make_orchestrator, store):
    make_orchestrator('company').execute()
    assert store.roles.get_by_key('company-admin') is not None
    manager = store.roles.get_by_key('department-manager')
    assert 'Employee Management' in {p.name for p in store.permissions_for_role(manager.id)}
    tenant = store.tenants.get_by_key('digital-company')
    rules = store.policy_rules.list(ptype='p', v0='department-manager', v1=str(tenant.id), v2='/user/employees')
    assert [(r.v3, r.v4, r.v5) for r in rules] == [('*', None, None)]


def test_execute_compiles_rules_for_organization_roles(make_orchestrator, make_context, store):
    make_orchestrator('company').execute()
    tenant = store.tenants.get_by_key('digital-company')
    rows = store.policy_rules.list(ptype='p', v1=str(tenant.id))
    granted = {(r.v0, r.v2, r.v3) for r in rows if r.v0 in ('company-director', 'department-head')}
    assert granted == {
        ('company-director', '/organization/*', '*'),
        ('company-director', '/user/employees', '*'),
        ('department-head', '/user/employees', 'PUT'),
        ('department-head', '/space/groups', 'GET'),
    }
    assert policy.compile_dynamic(make_context('company')) == 0
