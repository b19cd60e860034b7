"""Signed, time-limited bearer tokens for the admin API.

Tokens are itsdangerous payloads signed with the app SECRET_KEY; verifying
one needs no server-side session store.
"""

from __future__ import annotations

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from ..core.exceptions import AuthorizationError
from .model import AdminUser, TokenClaims


class TokenService:
    SALT = "admin-auth"

    def __init__(self, secret_key: str, *, max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self.SALT)
        self._max_age = int(max_age_seconds)

    @property
    def max_age_seconds(self) -> int:
        return self._max_age

    def issue(self, admin: AdminUser) -> str:
        return self._serializer.dumps({"id": admin.admin_id, "username": admin.username})

    def verify(self, token: str) -> TokenClaims:
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthorizationError("Token expired")
        except BadSignature:
            raise AuthorizationError("Invalid token")

        try:
            return TokenClaims(admin_id=int(data["id"]), username=str(data["username"]))
        except (KeyError, TypeError, ValueError):
            raise AuthorizationError("Invalid token")
