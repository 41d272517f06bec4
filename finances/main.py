# finances/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from finances.config import Settings, get_settings
from finances.db import build_engine, create_db_and_tables
from finances.errors import FinancesError
from finances.observability import RequestLogMiddleware
from finances.routers.auth import router as auth_router
from finances.routers.reports import router as reports_router
from finances.routers.system import router as system_router
from finances.routers.users import router as users_router

logger = logging.getLogger("finances")


def create_app(
    settings: Optional[Settings] = None, engine: Optional[Engine] = None
) -> FastAPI:
    """
    Build the API. The engine is created at startup (or passed in) and lives on
    app.state.engine until shutdown; request sessions are opened from it.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = engine is None
        app.state.engine = engine if engine is not None else build_engine(
            settings.database_url
        )
        if settings.create_tables:
            create_db_and_tables(app.state.engine)
        try:
            yield
        finally:
            if owned:
                app.state.engine.dispose()

    app = FastAPI(title="Finances API", version="1.0.0", lifespan=lifespan)

    # SessionMiddleware added last: it wraps the request log, which reads the user
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
    )

    @app.exception_handler(FinancesError)
    async def finances_error_handler(request: Request, exc: FinancesError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Storage error"})

    # Routers
    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(reports_router)
    return app


app = create_app()
