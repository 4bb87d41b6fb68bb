from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.pool import StaticPool


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    def url(self) -> URL:
        return URL.create(
            "mysql+mysqlconnector",
            username=self.user,
            password=self.password,
            host=self.host,
            port=int(self.port),
            database=self.database,
        )


def _as_config(db_config: Mapping[str, Any]) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "meeting_tracker")),
    )


class DatabaseConnection:
    """Engine holder handed to every repository.

    Note: Each repository call checks out a pooled connection for one short
    transaction (safe for simple Flask apps).
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    @classmethod
    def from_url(cls, url: str | URL) -> "DatabaseConnection":
        text_url = str(url)
        if text_url.startswith("sqlite"):
            kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if text_url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every checkout sees an empty database.
                kwargs["poolclass"] = StaticPool
            return cls(create_engine(url, **kwargs))
        return cls(create_engine(url, pool_pre_ping=True))

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "DatabaseConnection":
        url: Optional[str] = settings.get("DATABASE_URL") or None
        if url:
            return cls.from_url(url)
        return cls.from_url(_as_config(settings.get("DB_CONFIG") or {}).url())

    @property
    def engine(self) -> Engine:
        return self._engine

    def connect(self):
        """Context manager yielding a connection inside a transaction."""
        return self._engine.begin()

    def describe(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)

    def dispose(self) -> None:
        self._engine.dispose()
