from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AdminUser:
    admin_id: int
    username: str
    password_hash: str
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict[str, Any]:
        # Never expose the hash.
        return {"id": self.admin_id, "username": self.username}


@dataclass(frozen=True)
class TokenClaims:
    """What a verified bearer token tells us about the caller."""

    admin_id: int
    username: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    admin: AdminUser
