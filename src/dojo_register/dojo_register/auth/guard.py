from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthenticationError
from .tokens import TokenService


def build_admin_required(tokens: TokenService):
    """Decorator factory guarding admin-only routes.

    No bearer token -> 401; a token that fails verification -> 403.
    The verified claims are available as ``flask.g.admin``.
    """

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            header = request.headers.get("Authorization", "")
            scheme, _, token = header.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                raise AuthenticationError("Access token required")

            g.admin = tokens.verify(token.strip())
            return view(*args, **kwargs)

        return wrapper

    return admin_required
