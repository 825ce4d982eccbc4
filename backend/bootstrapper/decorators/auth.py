import hmac
from functools import wraps
from typing import Set
from flask import abort, current_app, request
from flask_jwt_extended import verify_jwt_in_request, get_jwt

INIT_TOKEN_HEADER = 'X-Init-Token'


def current_permissions() -> Set[str]:
    claims = get_jwt()
    return set(claims.get('perms', []))


def has_permissions(*codes: str) -> bool:
    perms = current_permissions()
    return all(c in perms for c in codes)


def require_permissions(*codes: str):
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if not has_permissions(*codes):
                abort(403, description='Missing permission')
            return fn(*args, **kwargs)
        return wrapper
    return outer


def require_init_token(fn):
    """Demand the configured INIT_TOKEN in the X-Init-Token header; open when unset."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get('INIT_TOKEN') or ''
        if expected:
            supplied = request.headers.get(INIT_TOKEN_HEADER, '')
            if not hmac.compare_digest(supplied.encode('utf-8'), expected.encode('utf-8')):
                abort(401, description='Invalid or missing initialization token')
        return fn(*args, **kwargs)
    return wrapper
