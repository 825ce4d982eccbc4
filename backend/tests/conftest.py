import os, sys, pytest
# Ensure backend directory is on path so 'bootstrapper' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from flask_jwt_extended import create_access_token
import bootstrapper
from bootstrapper import create_app, get_db
from bootstrapper.config.initialization import InitConfig
from bootstrapper.models import Base
from bootstrapper.services.context import ProvisionContext
from bootstrapper.services.data_loader import get_data_loader
from bootstrapper.services.orchestrator import Orchestrator
from bootstrapper.services.store import Store


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    app = create_app({
        'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
        'JWT_SECRET_KEY': 'test-secret-key-with-enough-length-for-hs256',
        'INIT_MODE': 'website',
        'INIT_TOKEN': '',
        'INIT_ALLOW_REINITIALIZATION': False,
        'LOG_LEVEL': 'WARNING',
    })
    with app.app_context():
        Base.metadata.create_all(get_db().get_bind())
    yield app


@pytest.fixture(autouse=True)
def session(app_instance):
    """Fresh schema per test; every caller shares the scoped session."""
    bootstrapper.SessionLocal.remove()
    engine = bootstrapper.db_engine
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    s = get_db()
    yield s
    s.rollback()
    bootstrapper.SessionLocal.remove()


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def store(session):
    return Store(session)


@pytest.fixture()
def make_orchestrator(store):
    def make(mode='website', **overrides):
        return Orchestrator(store, InitConfig(mode=mode, **overrides))
    return make


@pytest.fixture()
def make_context(store):
    def make(mode='website', **overrides):
        return ProvisionContext(store=store, loader=get_data_loader(mode), config=InitConfig(mode=mode, **overrides))
    return make


@pytest.fixture()
def auth_headers(app_instance):
    def make(*perms, identity='1'):
        with app_instance.app_context():
            token = create_access_token(identity=identity, additional_claims={'perms': list(perms)})
        return {'Authorization': f'Bearer {token}'}
    return make
