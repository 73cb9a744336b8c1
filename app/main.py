"""FastAPI application factory for the support history API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from app.config import Settings, get_settings
from app.db import Database
from app.exceptions import (
    HistoryError,
    NotAuthenticatedError,
    error_detail,
    history_error_handler,
    not_authenticated_handler,
)
from app.routers.auth_router import router as auth_router
from app.routers.health_router import router as health_router
from app.routers.historico_router import router as historico_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _check_database(database: Database) -> None:
    """Log whether the database answers; the app starts either way."""
    try:
        now = database.check_connection()
    except SQLAlchemyError as e:
        logger.warning("Database connection failed: %s", error_detail(e))
        return
    logger.info("Database OK: %s", now)


def create_app(
    testing: bool = False,
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application.

    The Database (engine/pool) is injected or created from settings here, kept on
    app.state and disposed on shutdown when the app owns it. Every router is
    mounted under /api and, for older clients, at the root path.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    owns_database = database is None
    database = database or Database.from_settings(settings)
    logger.info(
        "Database target -> %s",
        settings.database_url_obj.render_as_string(hide_password=True),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not testing:
            _check_database(app.state.database)
        yield
        if owns_database:
            app.state.database.dispose()

    app = FastAPI(
        title="Support History API",
        description="Search support protocols, read transcripts and export them to PDF",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    cors_origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        # no explicit origins: reflect the caller's origin
        allow_origin_regex=None if cors_origins else ".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        same_site=settings.session_samesite,
        https_only=settings.session_secure,
        max_age=settings.session_max_age,
    )

    app.add_exception_handler(HistoryError, history_error_handler)
    app.add_exception_handler(NotAuthenticatedError, not_authenticated_handler)

    for router in (health_router, auth_router, historico_router):
        app.include_router(router, prefix=API_PREFIX)
        app.include_router(router, include_in_schema=False)

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        proxy_headers=True,
    )
