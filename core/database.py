"""
core/database.py -- Shared SQLAlchemy engine factory.

Both stores (auth/store.py and employees/store.py) run against ONE engine.
The engine is built in the application lifespan and handed to each store's
constructor; nothing in this module holds a live connection at import time.

SQLAlchemy Core keeps the stores database-agnostic: the same code runs on
SQLite (default, tests) and MySQL (DB_HOST set) -- only the URL changes.

Usage:
    engine = create_db_engine("sqlite:///employees.db")
    users = UserStore(engine)
    employees = EmployeeStore(engine)
    ...
    engine.dispose()
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def create_db_engine(db_url: str) -> Engine:
    """Return an Engine for db_url, with SQLite-specific tweaks when needed."""
    connect_args: dict = {}
    is_sqlite = db_url.startswith("sqlite")
    if is_sqlite:
        # FastAPI runs sync handlers in a thread pool.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args, pool_pre_ping=not is_sqlite)
    if is_sqlite and ":memory:" not in db_url and "mode=memory" not in db_url:
        event.listen(engine, "connect", _set_wal_mode)
    return engine
