from bootstrapper.errors import (
    InitializationError, CreationFailed, DependencyMissing, MalformedSeedRow, StepFailed, ValidationWarning,
)


def test_unknown_path_returns_error_json(client):
    resp = client.get('/non-existent-path')
    # Flask default 404 should be wrapped by error handler
    assert resp.status_code == 404
    body = resp.get_json()
    assert 'error' in body
    assert body['error']['status'] == 404
    assert 'detail' in body['error']


def test_internal_error_shape(client, monkeypatch):
    import bootstrapper.routes.initialize as init_mod

    def boom():
        raise RuntimeError('explode')

    monkeypatch.setattr(init_mod, '_orchestrator', boom)
    resp = client.get('/sys/init/state')
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['error']['status'] == 500
    assert body['error']['title'] == 'Internal Server Error'
    assert 'state' not in body


def test_every_error_is_an_initialization_error():
    for exc in (DependencyMissing('x'), CreationFailed('role', 'editor'), ValidationWarning([]),
                MalformedSeedRow('policy', ('a',), 4)):
        assert isinstance(exc, InitializationError)


def test_creation_failed_message_names_entity():
    exc = CreationFailed('tenant', 'website', ValueError('duplicate slug'))
    assert str(exc) == "failed to create tenant 'website': duplicate slug"
    assert exc.kind == 'tenant'
    assert exc.key == 'website'


def test_step_failed_keeps_cause_status():
    cause = DependencyMissing("default tenant 'website' not found")
    exc = StepFailed('users', cause)
    assert exc.http_status == 424
    assert exc.cause is cause
    assert str(exc).startswith('initialization step users failed:')
    assert StepFailed('menus', RuntimeError('db gone')).http_status == 500


def test_validation_warning_carries_findings():
    exc = ValidationWarning(['a', 'b'])
    assert exc.findings == ['a', 'b']
    assert exc.http_status == 422
    assert '2 consistency issue(s)' in str(exc)
