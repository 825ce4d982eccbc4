from flask import Blueprint, request, abort, current_app
from bootstrapper import get_db
from bootstrapper.config.initialization import InitConfig
from bootstrapper.services.data_loader import Mode
from bootstrapper.services.orchestrator import Orchestrator
from bootstrapper.services.store import Store
from bootstrapper.decorators.audit import audit_log
from bootstrapper.decorators.auth import require_permissions, require_init_token

init_bp = Blueprint('initialize', __name__)

MANAGE_SYSTEM = 'manage:system'


def _orchestrator() -> Orchestrator:
    return Orchestrator(Store(get_db()), InitConfig.from_mapping(current_app.config))


def _state_payload(orch: Orchestrator):
    return {'state': orch.get_state().to_dict()}


@init_bp.get('/state')
def get_state():
    return _state_payload(_orchestrator())


@init_bp.post('/execute')
@require_init_token
def execute():
    data = request.get_json(silent=True) or {}
    orch = _orchestrator()
    if data.get('mode') and Mode.parse(data['mode']).value != orch.get_state().mode:
        orch.set_mode(data['mode'])
    orch.execute(allow_reinit=bool(data.get('allow_reinit', False)))
    return _state_payload(orch)


@init_bp.post('/users')
@require_init_token
def initialize_users():
    orch = _orchestrator()
    orch.initialize_users()
    return _state_payload(orch)


@init_bp.post('/organizations')
@require_init_token
def initialize_organizations():
    orch = _orchestrator()
    orch.initialize_organizations()
    return _state_payload(orch)


@init_bp.put('/mode')
@require_permissions(MANAGE_SYSTEM)
@audit_log('INIT.MODE.SET', entity='Initialization', meta_keys=['mode'])
def set_mode():
    data = request.get_json(silent=True) or {}
    if not data.get('mode'):
        abort(400, description='mode required')
    orch = _orchestrator()
    state = orch.set_mode(data['mode'])
    return {'mode': state.mode, 'state': state.to_dict()}


@init_bp.post('/reset')
@require_permissions(MANAGE_SYSTEM)
@audit_log('INIT.RESET', entity='Initialization')
def reset():
    orch = _orchestrator()
    orch.reset_initialization()
    return _state_payload(orch)


@init_bp.get('/validate')
def validate():
    orch = _orchestrator()
    findings = orch.validate()
    return {
        'mode': orch.mode.value,
        'ok': not findings,
        'findings': [f.to_dict() for f in findings],
    }


@init_bp.get('/backups')
@require_permissions(MANAGE_SYSTEM)
def list_backups():
    return {'data': _orchestrator().list_backups()}


@init_bp.post('/backups')
@require_permissions(MANAGE_SYSTEM)
@audit_log('INIT.BACKUP.CREATE', entity='InitializationBackup', entity_id_key='key')
def create_backup():
    key = _orchestrator().create_backup()
    return {'key': key}, 201


@init_bp.post('/backups/<key>/restore')
@require_permissions(MANAGE_SYSTEM)
@audit_log('INIT.BACKUP.RESTORE', entity='InitializationBackup', entity_id_arg='key')
def restore_backup(key):
    orch = _orchestrator()
    orch.restore_backup(key)
    return _state_payload(orch)
