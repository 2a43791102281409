"""
Shared fixtures.

No database is needed: ``StubConnection`` stands in for a psycopg2
connection, records every statement executed on its cursors and
answers each one with the next queued response.
"""

from __future__ import annotations

import os
from typing import Any, List, Optional, Tuple

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")


class StubCursor:
    def __init__(self, connection: "StubConnection", cursor_factory: Any = None):
        self.connection = connection
        self.cursor_factory = cursor_factory
        self.rowcount = -1
        self._rows: List[Any] = []

    def __enter__(self) -> "StubCursor":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def execute(self, sql: str, params: Optional[Tuple[Any, ...]] = None) -> None:
        self.connection.executed.append((" ".join(sql.split()), params))
        response = self.connection.responses.pop(0) if self.connection.responses else []
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            # Row count of a DELETE/UPDATE.
            self.rowcount = response
            self._rows = []
            return
        self._rows = list(response)
        self.rowcount = len(self._rows)

    def fetchone(self) -> Any:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> List[Any]:
        return list(self._rows)


class StubConnection:
    """Queue responses with ``respond`` before calling a service.

    A response is a list of rows, an ``int`` row count or an exception
    to raise from ``execute``.
    """

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.executed: List[Tuple[str, Any]] = []
        self.cursor_factories: List[Any] = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def respond(self, *responses: Any) -> "StubConnection":
        self.responses.extend(responses)
        return self

    def cursor(self, cursor_factory: Any = None) -> StubCursor:
        self.cursor_factories.append(cursor_factory)
        return StubCursor(self, cursor_factory)

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True

    @property
    def last_sql(self) -> str:
        return self.executed[-1][0]

    @property
    def last_params(self) -> Any:
        return self.executed[-1][1]


@pytest.fixture
def conn() -> StubConnection:
    return StubConnection()


@pytest.fixture
def client(conn):
    from fastapi.testclient import TestClient

    from neuromkt_api.app.core.db import get_db
    from neuromkt_api.app.main import app

    app.dependency_overrides[get_db] = lambda: conn
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_header(email: str = "ana@neuromkt.com", role: str = "admin") -> dict:
    from neuromkt_api.app.core.security import create_access_token

    token = create_access_token({"sub": email, "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict:
    return auth_header(role="admin")


@pytest.fixture
def user_headers() -> dict:
    return auth_header(email="luis@neuromkt.com", role="usuario")
