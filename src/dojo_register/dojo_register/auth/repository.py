from __future__ import annotations

from typing import Optional, Protocol

from .model import AdminUser


class AdminRepository(Protocol):
    def get_by_id(self, admin_id: int) -> Optional[AdminUser]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        raise NotImplementedError

    def update_password_hash(self, admin_id: int, password_hash: str) -> bool:
        raise NotImplementedError
