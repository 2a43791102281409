import asyncio

import psycopg2
import pytest

from neuromkt_api.app.core import db
from neuromkt_api.app.services.project_service import ProjectService


def test_scope_leaves_a_caller_connection_open(conn):
    with db.connection_scope(conn) as scoped:
        assert scoped is conn
    assert not conn.committed
    assert not conn.closed


def test_owned_connection_commits_and_closes(monkeypatch, conn):
    monkeypatch.setattr(db, "get_connection", lambda: conn)
    with db.connection_scope():
        pass
    assert conn.committed
    assert conn.closed


def test_owned_connection_rolls_back_on_error(monkeypatch, conn):
    monkeypatch.setattr(db, "get_connection", lambda: conn)
    with pytest.raises(psycopg2.Error):
        with db.connection_scope():
            raise psycopg2.Error("boom")
    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_returned_code_rejects_empty_values():
    assert db.returned_code(" P7 ", "i_proyecto") == "P7"
    with pytest.raises(ValueError):
        db.returned_code("", "i_proyecto")
    with pytest.raises(ValueError):
        db.returned_code(None, "i_proyecto")


def test_check_connection(monkeypatch, conn):
    monkeypatch.setattr(db, "get_connection", lambda: conn.respond([(1,)]))
    assert db.check_connection() is True

    def refuse():
        raise psycopg2.OperationalError("connection refused")

    monkeypatch.setattr(db, "get_connection", refuse)
    assert db.check_connection() is False


def _on_event_loop():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class FakePool:
    def __init__(self, minconn, maxconn, dsn, **kwargs):
        self.bounds = (minconn, maxconn)
        self.dsn = dsn
        self.kwargs = kwargs
        self.connection = None
        self.returned = []
        self.closed = False

    def getconn(self):
        return self.connection

    def putconn(self, conn, close=False):
        self.returned.append((conn, close))

    def closeall(self):
        self.closed = True


def test_connections_are_borrowed_from_the_pool(monkeypatch, conn):
    monkeypatch.setattr(db, "ThreadedConnectionPool", FakePool)
    monkeypatch.setattr(db, "_pool", None)
    pool = db.get_pool()
    pool.connection = conn

    with db.connection_scope() as scoped:
        assert scoped is conn

    assert conn.committed
    assert not conn.closed
    assert pool.returned == [(conn, False)]
    assert pool.bounds == (db.settings.db_pool_min, db.settings.db_pool_max)
    assert pool.kwargs["connect_timeout"] == db.settings.db_connect_timeout
    assert db.get_pool() is pool

    db.close_pool()
    assert pool.closed
    assert db._pool is None


def test_service_queries_run_off_the_event_loop(conn):
    seen = []
    original = conn.cursor

    def cursor(cursor_factory=None):
        seen.append(_on_event_loop())
        return original(cursor_factory)

    conn.cursor = cursor
    asyncio.run(ProjectService.list_projects(conn=conn))
    assert seen == [False]


def test_run_in_thread_keeps_the_result():
    @db.run_in_thread
    def blocking(value):
        return value, _on_event_loop()

    assert asyncio.run(blocking(7)) == (7, False)
