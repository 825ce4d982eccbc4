from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, scoped_session
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import logging
import os

__version__ = '0.1.0'

load_dotenv()

db_engine = None
SessionLocal = None
jwt = JWTManager()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def create_app(config: Optional[Dict[str, Any]] = None):
    global db_engine, SessionLocal
    app = Flask(__name__)

    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    app.config['DATABASE_URL'] = os.getenv('DATABASE_URL', 'sqlite:///dev.db')
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')
    app.config['INIT_MODE'] = os.getenv('INIT_MODE', 'website')
    app.config['INIT_ALLOW_REINITIALIZATION'] = _env_flag('INIT_ALLOW_REINITIALIZATION', False)
    app.config['INIT_PERSIST_STATE'] = _env_flag('INIT_PERSIST_STATE', True)
    app.config['INIT_TOKEN'] = os.getenv('INIT_TOKEN', '')
    app.config['INIT_PASSWORD_MIN_LENGTH'] = int(os.getenv('INIT_PASSWORD_MIN_LENGTH', '8'))
    app.config['INIT_PASSWORD_REQUIRE_UPPERCASE'] = _env_flag('INIT_PASSWORD_REQUIRE_UPPERCASE', True)
    app.config['INIT_PASSWORD_REQUIRE_LOWERCASE'] = _env_flag('INIT_PASSWORD_REQUIRE_LOWERCASE', True)
    app.config['INIT_PASSWORD_REQUIRE_DIGITS'] = _env_flag('INIT_PASSWORD_REQUIRE_DIGITS', True)
    app.config['INIT_PASSWORD_REQUIRE_SPECIAL'] = _env_flag('INIT_PASSWORD_REQUIRE_SPECIAL', False)

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    app.logger.setLevel(app.config['LOG_LEVEL'])
    logging.getLogger('bootstrapper').setLevel(app.config['LOG_LEVEL'])

    # Database
    db_url = app.config['DATABASE_URL']
    if db_url.endswith(':memory:'):
        # Ensure a single shared in-memory SQLite database across all sessions
        db_engine = create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_engine = create_engine(db_url, echo=False, future=True)
    SessionLocal = scoped_session(sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False))

    jwt.init_app(app)

    from .routes.initialize import init_bp
    app.register_blueprint(init_bp, url_prefix='/sys/init')

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    from .errors import InitializationError

    @app.errorhandler(InitializationError)
    def handle_initialization_error(e):  # type: ignore
        payload = {
            'error': {
                'status': e.http_status,
                'title': type(e).__name__,
                'detail': str(e),
            }
        }
        if e.state is not None:
            payload['state'] = e.state.to_dict()
        return payload, e.http_status

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        # Unhandled exception
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    return app


def get_db():
    return SessionLocal()
