"""
PostgreSQL integration.

The schema, tables and stored functions live in the ``neuromkt``
schema of an external PostgreSQL database; this application never
creates or migrates them.  This module provides:

* ``get_connection`` / ``release_connection`` -- borrow a connection
  from the process-wide ``ThreadedConnectionPool`` and hand it back;
* ``connection_scope`` -- reuse a connection handed in by the caller,
  or borrow one and commit/rollback/release it on every exit path;
* ``get_db`` -- FastAPI dependency giving each request one connection;
* ``run_in_thread`` -- decorator turning a blocking service method
  into a coroutine that runs in a worker thread, so psycopg2 never
  blocks the event loop;
* ``dict_cursor`` / ``returned_code`` -- small helpers shared by the
  service classes;
* ``check_connection`` -- reachability check for the health endpoint;
* ``close_pool`` -- drop every pooled connection at shutdown.

Errors raised by the store are logged with a ``[Postgres]`` prefix and
re-raised unmodified.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterator, Optional, TypeVar

import psycopg2
from psycopg2.extensions import connection as PGConnection
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from .config import settings
from .errors import store_message

logger = logging.getLogger(__name__)

SCHEMA = "neuromkt"

T = TypeVar("T")

_pool: Optional[ThreadedConnectionPool] = None
_pool_lock = threading.Lock()


def get_pool() -> ThreadedConnectionPool:
    """Return the connection pool, creating it on first use."""
    global _pool
    if _pool is not None:
        return _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadedConnectionPool(
                settings.db_pool_min,
                settings.db_pool_max,
                settings.database_url,
                connect_timeout=settings.db_connect_timeout,
            )
            logger.info("Opened connection pool (%d-%d)", settings.db_pool_min, settings.db_pool_max)
        return _pool


def close_pool() -> None:
    global _pool
    with _pool_lock:
        if _pool is None:
            return
        _pool.closeall()
        _pool = None
        logger.info("Closed connection pool")


def get_connection() -> PGConnection:
    """Borrow a connection from the pool."""
    return get_pool().getconn()


def release_connection(conn: PGConnection) -> None:
    """Give a borrowed connection back; broken connections are discarded."""
    pool = _pool
    if pool is None:
        conn.close()
        return
    pool.putconn(conn, close=bool(conn.closed))


def run_in_thread(func: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Run a blocking function in a worker thread when awaited.

    Service methods are written as plain blocking code and decorated
    with this below ``@classmethod``; callers ``await`` them as usual.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(func, *args, **kwargs)

    return wrapper


@contextmanager
def connection_scope(conn: Optional[PGConnection] = None) -> Iterator[PGConnection]:
    """Yield a connection for one operation.

    A connection passed in by the caller is yielded as is: the caller
    owns its transaction and its lifetime.  Otherwise a connection is
    borrowed from the pool, committed when the block succeeds, rolled
    back when it fails, and released in both cases.
    """
    if conn is not None:
        try:
            yield conn
        except psycopg2.Error as exc:
            logger.error("[Postgres] %s", store_message(exc))
            raise
        return

    try:
        with _owned_connection() as owned:
            yield owned
    except psycopg2.Error as exc:
        logger.error("[Postgres] %s", store_message(exc))
        raise


@contextmanager
def _owned_connection() -> Iterator[PGConnection]:
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(conn)


def get_db() -> Iterator[PGConnection]:
    """FastAPI dependency yielding one connection per request.

    As a plain generator it is run in FastAPI's threadpool, so borrowing
    and committing never block the event loop.
    """
    with _owned_connection() as conn:
        yield conn


def dict_cursor(conn: PGConnection):
    """Cursor returning rows as dictionaries keyed by column name."""
    return conn.cursor(cursor_factory=RealDictCursor)


def returned_code(value: Any, function: str) -> str:
    """Validate the identifier returned by an ``i_*``/``u_*`` function.

    Nothing is assumed about the format beyond "non-empty text".
    """
    code = "" if value is None else str(value).strip()
    if not code:
        raise ValueError(f"{SCHEMA}.{function} did not return a code")
    return code


def check_connection() -> bool:
    """Return ``True`` when the database answers ``SELECT 1``."""
    try:
        with connection_scope() as conn:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        return True
    except psycopg2.Error as exc:
        logger.warning("Database health check failed: %s", exc)
        return False

