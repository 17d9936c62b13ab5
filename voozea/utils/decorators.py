from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from voozea.extension import db
from voozea.models import User
from voozea.errors import ServiceError


def _load_principal(optional=False):
    verify_jwt_in_request(optional=optional)
    user_id = get_jwt_identity()
    g.current_user = db.session.get(User, user_id) if user_id else None
    return g.current_user


def login_required(fn):
    """
    Verify the bearer token and attach the user to g.current_user.
    """
    @wraps(fn)
    def decorator(*args, **kwargs):
        if _load_principal() is None:
            return {"message": "User not found"}, 401
        return fn(*args, **kwargs)
    return decorator


def login_optional(fn):
    """Like login_required, but anonymous callers get g.current_user = None."""
    @wraps(fn)
    def decorator(*args, **kwargs):
        _load_principal(optional=True)
        return fn(*args, **kwargs)
    return decorator


def admin_required(fn):
    """
    Verify the bearer token and require an administrator. The admin flag is
    read from the database, not from the token claims, so revoking it takes
    effect immediately.
    """
    @wraps(fn)
    def decorator(*args, **kwargs):
        user = _load_principal()
        if user is None:
            return {"message": "User not found"}, 401
        if not user.is_admin:
            return {"message": "Forbidden: admin access required"}, 403
        return fn(*args, **kwargs)
    return decorator


def service_errors(fn):
    """Turn a ServiceError raised by the service layer into a JSON response."""
    @wraps(fn)
    def decorator(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ServiceError as e:
            return e.to_response()
    return decorator
