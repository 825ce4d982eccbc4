from sqlalchemy import select
from bootstrapper.models import AuditLog
from bootstrapper.services.audit import add_audit

MANAGE = 'manage:system'


def test_healthz(client):
    assert client.get('/healthz').get_json() == {'status': 'ok'}


def test_state_before_initialization(client):
    resp = client.get('/sys/init/state')
    assert resp.status_code == 200
    state = resp.get_json()['state']
    assert state['is_initialized'] is False
    assert state['phase'] == 'not_initialized'
    assert state['mode'] == 'website'
    assert state['statuses'] == []


def test_execute_then_conflict(client):
    resp = client.post('/sys/init/execute')
    assert resp.status_code == 200
    state = resp.get_json()['state']
    assert state['is_initialized'] is True
    assert [s['component'] for s in state['statuses']][0] == 'roles'

    resp = client.post('/sys/init/execute')
    assert resp.status_code == 409
    body = resp.get_json()
    assert body['error']['title'] == 'AlreadyInitialized'
    assert body['state']['is_initialized'] is True

    resp = client.post('/sys/init/execute', json={'allow_reinit': True})
    assert resp.status_code == 200


def test_execute_with_mode(client):
    resp = client.post('/sys/init/execute', json={'mode': 'company'})
    assert resp.status_code == 200
    assert resp.get_json()['state']['mode'] == 'company'


def test_init_token_required_when_configured(client, app_instance, monkeypatch):
    monkeypatch.setitem(app_instance.config, 'INIT_TOKEN', 's3cret')
    assert client.post('/sys/init/execute').status_code == 401
    assert client.post('/sys/init/users', headers={'X-Init-Token': 'wrong'}).status_code == 401
    resp = client.post('/sys/init/users', headers={'X-Init-Token': 's3cret'})
    assert resp.status_code == 200
    components = [s['component'] for s in resp.get_json()['state']['statuses']]
    assert components == ['roles', 'permissions', 'tenants', 'users', 'policies']


def test_initialize_organizations_route(client):
    resp = client.post('/sys/init/organizations')
    assert resp.status_code == 200
    assert resp.get_json()['state']['is_initialized'] is False


def test_set_mode_requires_jwt(client):
    assert client.put('/sys/init/mode', json={'mode': 'company'}).status_code == 401


def test_set_mode_requires_permission(client, auth_headers):
    resp = client.put('/sys/init/mode', json={'mode': 'company'}, headers=auth_headers('read:dashboard'))
    assert resp.status_code == 403


def test_set_mode_validates_body(client, auth_headers):
    resp = client.put('/sys/init/mode', json={}, headers=auth_headers(MANAGE))
    assert resp.status_code == 400
    assert resp.get_json()['error']['detail'] == 'mode required'


def test_set_mode_is_audited(client, auth_headers, session):
    resp = client.put('/sys/init/mode', json={'mode': 'company'}, headers=auth_headers(MANAGE, identity='7'))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['mode'] == 'company'
    assert body['state']['mode'] == 'company'
    entry = session.execute(select(AuditLog).where(AuditLog.action == 'INIT.MODE.SET')).scalars().one()
    assert entry.actor_user_id == 7
    assert entry.meta == {'mode': 'company'}
    assert client.get('/sys/init/state').get_json()['state']['mode'] == 'company'


def test_set_mode_locked_after_execute(client, auth_headers):
    client.post('/sys/init/execute')
    resp = client.put('/sys/init/mode', json={'mode': 'enterprise'}, headers=auth_headers(MANAGE))
    assert resp.status_code == 409
    assert resp.get_json()['error']['title'] == 'ModeLocked'


def test_validate_route(client):
    body = client.get('/sys/init/validate').get_json()
    assert body == {'mode': 'website', 'ok': True, 'findings': []}


def test_reset_disabled_by_default(client, auth_headers):
    client.post('/sys/init/execute')
    resp = client.post('/sys/init/reset', headers=auth_headers(MANAGE))
    assert resp.status_code == 409


def test_reset_when_allowed(client, app_instance, auth_headers, monkeypatch, session):
    monkeypatch.setitem(app_instance.config, 'INIT_ALLOW_REINITIALIZATION', True)
    client.post('/sys/init/execute')
    resp = client.post('/sys/init/reset', headers=auth_headers(MANAGE))
    assert resp.status_code == 200
    assert resp.get_json()['state']['is_initialized'] is False
    entry = session.execute(select(AuditLog)).scalars().one()
    assert entry.action == 'INIT.RESET'
    assert entry.entity == 'Initialization'
    assert entry.actor_user_id == 1
    assert entry.remote_addr == '127.0.0.1'
    assert entry.meta is None


def test_backup_routes(client, auth_headers, session):
    headers = auth_headers(MANAGE)
    resp = client.post('/sys/init/backups', headers=headers)
    assert resp.status_code == 409
    assert resp.get_json()['error']['title'] == 'NotYetInitialized'

    client.post('/sys/init/execute')
    resp = client.post('/sys/init/backups', headers=headers)
    assert resp.status_code == 201
    key = resp.get_json()['key']
    assert client.get('/sys/init/backups', headers=headers).get_json() == {'data': [key]}

    resp = client.post(f'/sys/init/backups/{key}/restore', headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()['state']['is_initialized'] is True

    entries = session.execute(select(AuditLog).order_by(AuditLog.id)).scalars().all()
    assert [(e.action, e.entity_id) for e in entries] == [
        ('INIT.BACKUP.CREATE', key),
        ('INIT.BACKUP.RESTORE', key),
    ]
    assert {e.entity for e in entries} == {'InitializationBackup'}
    assert all(e.meta is None for e in entries)


def test_restore_unknown_backup(client, auth_headers):
    resp = client.post('/sys/init/backups/19990101000000000000/restore', headers=auth_headers(MANAGE))
    assert resp.status_code == 424
    assert resp.get_json()['error']['title'] == 'DependencyMissing'


def test_step_failure_reported_with_state(client, monkeypatch):
    from bootstrapper.errors import SeedDataInvalid
    from bootstrapper.services import orchestrator

    def broken(ctx):
        raise SeedDataInvalid('bad tenants')

    monkeypatch.setattr(orchestrator, 'STEPS', tuple(
        (name, broken if name == 'tenants' else step) for name, step in orchestrator.STEPS
    ))
    resp = client.post('/sys/init/execute')
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['error']['title'] == 'StepFailed'
    assert 'tenants' in body['error']['detail']
    assert body['state']['phase'] == 'failed'


def test_audit_entry_without_token_or_entity(app_instance, session):
    with app_instance.test_request_context('/sys/init/reset', environ_base={'REMOTE_ADDR': '10.0.0.5'}):
        add_audit('INIT.RESET', meta={})
        session.commit()
    entry = session.execute(select(AuditLog)).scalars().one()
    assert entry.actor_user_id == 0
    assert entry.entity == 'Initialization'
    assert entry.remote_addr == '10.0.0.5'
    assert entry.meta is None
