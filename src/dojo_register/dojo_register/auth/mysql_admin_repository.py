from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AdminUser
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[AdminUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT admin_id, username, password_hash, created_at FROM admin_users WHERE {where}",
                params,
            )
            row = fetchone(cur)
            if not row:
                return None
            return AdminUser(
                admin_id=int(row["admin_id"]),
                username=row["username"],
                password_hash=row["password_hash"],
                created_at=row.get("created_at"),
            )

    def get_by_id(self, admin_id: int) -> Optional[AdminUser]:
        return self._get_one("admin_id=%s", (int(admin_id),))

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        return self._get_one("username=%s", (username,))

    def update_password_hash(self, admin_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE admin_users SET password_hash=%s WHERE admin_id=%s",
                (password_hash, int(admin_id)),
            )
            return cur.rowcount > 0
