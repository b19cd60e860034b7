from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag
from mysql.connector.errors import PoolError

logger = logging.getLogger(__name__)

_POOL_POLL_SECONDS = 0.05


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5
    # Seconds to wait for a free pooled connection before giving up.
    pool_timeout: float = 5.0


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a connection pool.

    Note: Each repository call borrows a connection and returns it on close().
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        # Created lazily so the app can start before MySQL is reachable.
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name="dojo_register",
                pool_size=int(self._config.pool_size),
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, so a no-op UPDATE still counts.
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        return self._pool

    def connect(self):
        pool = self._get_pool()
        deadline = time.monotonic() + float(self._config.pool_timeout)
        while True:
            try:
                return pool.get_connection()
            except PoolError:
                # mysql-connector does not block on an exhausted pool.
                if time.monotonic() >= deadline:
                    logger.error("No free database connection after %.1fs", self._config.pool_timeout)
                    raise
                time.sleep(_POOL_POLL_SECONDS)
