from functools import wraps
from flask import request, g

from shop_admin.errors import Forbidden
from shop_admin.models.database import Role
from shop_admin.services.auth_service import AuthService


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def require_role(required: Role):
    """Require a valid token whose role is at least ``required``.

    The verified identity is exposed to the view as ``g.session``.
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            session = AuthService.decode_token(_bearer_token())
            if not session.allows(required):
                raise Forbidden(f"{required.value.capitalize()} access required")
            g.session = session
            return f(*args, **kwargs)
        return decorated
    return decorator


require_auth = require_role(Role.USER)
require_editor = require_role(Role.EDITOR)
require_admin = require_role(Role.ADMIN)
