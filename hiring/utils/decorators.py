from functools import wraps
from flask import abort
from flask_login import current_user
from ..errors import AuthorizationError
from ..models.user import Role


def roles_required(*roles, message="Insufficient permissions"):
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if getattr(current_user, "role", None) not in roles:
                raise AuthorizationError(message)
            return view(*args, **kwargs)
        return wrapped
    return decorator


hr_required = roles_required(*Role.STAFF, message="HR access required")
