import pytest
from bootstrapper.services.data_loader import Mode, get_data_loader


@pytest.mark.parametrize('raw,expected', [
    ('website', Mode.WEBSITE),
    ('company', Mode.COMPANY),
    (' Enterprise ', Mode.ENTERPRISE),
    ('bogus', Mode.WEBSITE),
    ('', Mode.WEBSITE),
    (None, Mode.WEBSITE),
    (Mode.COMPANY, Mode.COMPANY),
])
def test_mode_parse_falls_back_to_website(raw, expected):
    assert Mode.parse(raw) is expected


def test_unknown_mode_selects_website_loader():
    assert get_data_loader('no-such-mode') is get_data_loader('website')
    assert get_data_loader('company').mode is Mode.COMPANY


@pytest.mark.parametrize('mode', ['website', 'company', 'enterprise'])
def test_every_mode_has_core_seed_data(mode):
    loader = get_data_loader(mode)
    assert 'super-admin' in loader.role_slugs()
    assert 'Super Admin Access' in loader.permission_names()
    assert loader.profile.default_tenant_slug in {t.slug for t in loader.tenants}
    for username in loader.profile.required_usernames:
        assert loader.user(username) is not None
    assert {'dashboard', 'system'} <= {m.slug for m in loader.menus.headers}


def test_loader_data_is_read_only():
    loader = get_data_loader('company')
    with pytest.raises(TypeError):
        loader.role_permissions['intruder'] = ('Super Admin Access',)
    with pytest.raises(AttributeError):
        loader.mode = Mode.WEBSITE


def test_website_has_no_organization_structure():
    assert get_data_loader('website').organization.is_empty
    assert not get_data_loader('company').organization.is_empty


def test_company_employee_hierarchy_references_known_users():
    loader = get_data_loader('company')
    assert loader.user('senior.developer').employee.manager == 'tech.lead'
    assert loader.user('tech.lead').employee.manager == 'company.admin'
    for tpl in loader.users:
        if tpl.employee is not None and tpl.employee.manager:
            assert loader.user(tpl.employee.manager) is not None
