from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: Optional[str] = "attendance_tracker"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    def server_only(self) -> "DBConfig":
        """Same server and credentials, no default schema (for CREATE DATABASE)."""
        return DBConfig(host=self.host, port=self.port, user=self.user, password=self.password, database=None)


class DatabaseConnection:
    """Connection factory owned by the container and injected into repositories.

    Every repository call opens its own short-lived connection; there is no
    process-wide connection or pool.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        kwargs = {k: v for k, v in asdict(self._config).items() if v is not None}
        return mysql.connector.connect(use_pure=True, **kwargs)
