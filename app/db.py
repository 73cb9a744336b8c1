"""Database handle: engine, session factory and the request-scoped get_db dependency."""

from __future__ import annotations

from typing import Any, Dict, Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import Settings


Base = declarative_base()


class Database:
    """Owns the engine (connection pool) for the lifetime of the application."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.session_factory = sessionmaker(autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.database_url_obj
        kwargs: Dict[str, Any] = {"pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            kwargs["pool_size"] = settings.database_pool_size
            kwargs["max_overflow"] = settings.database_max_overflow
            kwargs["connect_args"] = {
                "application_name": settings.app_name,
                # keep idle connections alive behind NAT/proxies
                "keepalives": 1,
            }
            if settings.database_ssl:
                kwargs["connect_args"]["sslmode"] = "require"
        return cls(create_engine(url, **kwargs))

    def session(self) -> Session:
        return self.session_factory()

    def check_connection(self) -> Any:
        """Round-trip to the database and return its current time."""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database stored on the application."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
