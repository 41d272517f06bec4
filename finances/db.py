from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger("finances.db")


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine for this process.
    Called once at startup (see main.lifespan); nothing imports a global engine.
    """
    # SQLite needs a special connect arg; others (e.g., Postgres) don't.
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}

    engine = create_engine(
        database_url,
        echo=echo,  # set True to see SQL in console
        connect_args=connect_args,
    )
    # Log which DB URL is actually in use (helps avoid “which finances.db?” confusion).
    logger.info("DB URL in use: %s", engine.url)
    return engine


def get_session(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency: yields a database session and closes it afterwards."""
    with Session(request.app.state.engine) as session:
        yield session


def create_db_and_tables(engine: Engine) -> None:
    """
    Helper for local setups and tests.
    Prefer Alembic migrations for schema changes.
    """
    import finances.models  # noqa: F401  # registers tables on SQLModel.metadata

    SQLModel.metadata.create_all(engine)
