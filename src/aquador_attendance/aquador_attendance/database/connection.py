from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.constants import DEFAULT_CONNECTION_TIMEOUT_SECONDS
from .errors import translate_mysql_error

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT_SECONDS

    @classmethod
    def from_mapping(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "aquador")),
            connection_timeout=int(db_config.get("connection_timeout", DEFAULT_CONNECTION_TIMEOUT_SECONDS)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (one per repository call),
    each bounded by `connection_timeout`.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=int(self._config.connection_timeout),
            )
        except mysql.connector.Error as e:
            logger.error("Database connection to %s:%s failed: %s", self._config.host, self._config.port, e)
            raise translate_mysql_error(e) from e
