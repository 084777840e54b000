from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from pagination_flow.settings import Settings, get_settings


@lru_cache(maxsize=4)
def _get_engine_cached(database_url: str, echo: bool) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI serves sync routes from a threadpool.
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_engine(settings: Settings | None = None) -> Engine:
    resolved = settings or get_settings()
    return _get_engine_cached(resolved.database_url, resolved.database_echo)


def create_tables(engine: Engine) -> None:
    # Registers the table on SQLModel.metadata.
    from pagination_flow import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


# Dependency
def get_session() -> Iterator[Session]:
    with Session(get_engine(), expire_on_commit=False) as session:
        yield session


def healthcheck(engine: Engine | None = None) -> bool:
    with (engine or get_engine()).connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
