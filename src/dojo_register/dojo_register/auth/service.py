from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_text
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import LoginResult
from .repository import AdminRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use cases: admin login and password rotation."""

    def __init__(self, admins: AdminRepository, tokens: TokenService):
        self._admins = admins
        self._tokens = tokens

    def login(self, username: Optional[str], password: Optional[str]) -> LoginResult:
        if not username or not password:
            raise ValidationError("Username and password required")
        if not isinstance(username, str) or not isinstance(password, str):
            raise ValidationError("Username and password must be strings")

        admin = self._admins.get_by_username(username)
        if not admin or not _password_matches(admin.password_hash, password):
            logger.warning("Failed admin login for %r", username)
            raise AuthenticationError("Invalid credentials")

        logger.info("Admin %r logged in", admin.username)
        return LoginResult(token=self._tokens.issue(admin), admin=admin)

    def change_password(self, admin_id: int, *, current_password: Optional[str], new_password: Optional[str]) -> None:
        require_text(current_password, "Current password")
        require_text(new_password, "New password")
        if new_password != new_password.strip():
            raise ValidationError("New password must not start or end with whitespace")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        admin = self._admins.get_by_id(admin_id)
        if not admin or not _password_matches(admin.password_hash, current_password):
            raise AuthenticationError("Current password is incorrect")

        self._admins.update_password_hash(admin.admin_id, generate_password_hash(new_password))
        logger.info("Admin %r changed password", admin.username)
