# infra/db/base.py
from __future__ import annotations
import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

DB_URL_ENV = "FLOW_DB_URL"

Base = declarative_base()

# Bound lazily by init_engine() so importing the ORM never touches the disk.
SessionLocal = sessionmaker(expire_on_commit=False)

_engine: Engine | None = None


def database_url() -> str:
    override = (os.getenv(DB_URL_ENV) or "").strip()
    if override:
        return override
    return f"sqlite:///{default_db_path().as_posix()}"


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str) -> Engine:
    engine = create_engine(db_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_engine(db_url: str | None = None) -> Engine:
    """Create the process-wide engine (once) and bind ``SessionLocal`` to it."""
    global _engine
    if _engine is None or (db_url and str(_engine.url) != db_url):
        url = db_url or database_url()
        logger.info("Using database at: %s", url)
        _engine = create_db_engine(url)
        SessionLocal.configure(bind=_engine)
    return _engine


__all__ = ["Base", "DB_URL_ENV", "SessionLocal", "create_db_engine", "database_url", "init_engine"]
