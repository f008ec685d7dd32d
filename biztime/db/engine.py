# biztime/db/engine.py

import os

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

DB_URL = os.environ.get("BIZTIME_DB_URL", "sqlite:///biztime.sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) otherwise
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str = DB_URL) -> Engine:
    """
    Build the engine shared by every request for the life of the process.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            future=True,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(url, future=True)


def get_engine(request: Request) -> Engine:
    """
    FastAPI dependency: the engine opened by the application lifespan.
    """
    return request.app.state.engine
