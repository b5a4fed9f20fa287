"""Engine construction and store-error translation.

SQLite needs some help to behave like a transactional server under
concurrent writers: pysqlite's implicit BEGIN is switched off and every
transaction starts with ``BEGIN IMMEDIATE`` so writers queue on the busy
timeout instead of failing on a lock upgrade.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import DBAPIError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30

# SQLSTATEs for serialization failure and deadlock
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})
_SQLITE_LOCK_MESSAGES = ("database is locked", "database table is locked")


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        # pool_pre_ping ensures connections are alive before using them
        return create_engine(url, echo=echo, pool_pre_ping=True, pool_size=10, max_overflow=20)

    options = {
        "echo": echo,
        "connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
    }
    in_memory = url.database in (None, "", ":memory:")
    if in_memory:
        # one shared connection, otherwise every checkout is a fresh empty database
        options["poolclass"] = StaticPool
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **options)
    if in_memory:
        _serialize_checkouts(engine)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection):
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    logger.debug("store: engine=sqlite database=%s", url.database or ":memory:")
    return engine


def is_contention(exc: BaseException) -> bool:
    """True if *exc* means another transaction held the rows we needed."""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in _SQLITE_LOCK_MESSAGES)


def _serialize_checkouts(engine: Engine) -> None:
    """Let one thread at a time hold the shared in-memory connection.

    SQLite's busy timeout cannot help here since every thread talks over
    the same DBAPI connection; a second BEGIN on it would fail outright.
    The lock is reentrant so a thread may open nested connections.
    """
    lock = threading.RLock()

    @event.listens_for(engine, "checkout")
    def _on_checkout(dbapi_connection, connection_record, connection_proxy):
        lock.acquire()

    @event.listens_for(engine, "checkin")
    def _on_checkin(dbapi_connection, connection_record):
        lock.release()
