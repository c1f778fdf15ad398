"""SQLAlchemy engine construction and error translation.

SQLite (the default) gets a busy timeout so concurrent writers queue on the
database lock instead of failing at once. In-memory SQLite is refused:
every session would share one connection, and with it one transaction.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from boxstock.domain.exceptions import StoreError
from boxstock.infrastructure.persistence.sql_schema import metadata
from boxstock.logging_config import get_logger

logger = get_logger("db.engine")

SQLITE_BUSY_TIMEOUT_SECONDS = 30


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine and make sure the schema exists."""
    url = make_url(database_url)
    kwargs: dict = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        database = url.database
        if database in (None, "", ":memory:") or url.query.get("mode") == "memory":
            raise StoreError(
                "In-memory SQLite databases are not supported; use a file path"
            )
        Path(database).parent.mkdir(parents=True, exist_ok=True)
        kwargs["connect_args"] = {
            "timeout": SQLITE_BUSY_TIMEOUT_SECONDS,
            "check_same_thread": False,
        }
    else:
        kwargs["pool_pre_ping"] = True

    try:
        engine = create_engine(url, **kwargs)
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise StoreError(f"Could not open database: {exc}") from exc

    logger.info(
        "engine_initialized",
        extra={"dialect": url.get_backend_name(), "echo": echo},
    )
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def translate_store_errors(action: str) -> Iterator[None]:
    """Re-raise driver/SQLAlchemy failures as StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("store_failure", extra={"action": action}, exc_info=True)
        raise StoreError(f"Storage failure while trying to {action}") from exc
