"""
Business logic for application users.

Users are keyed by email and managed through the ``neuromkt.i_usuario``,
``u_usuario`` and ``d_usuario`` stored functions.  Passwords are handed
to the database, which hashes them and checks them in
``neuromkt.f_login_usuario``; the application never reads a stored
credential back.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2 import errors as pg_errors
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate, require_text
from neuromkt_api.app.core.fields import blank_to_none, normalize_email
from neuromkt_api.app.schemas.user import LoginResult, UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)


def _require_email(email: Optional[str]) -> str:
    normalized = normalize_email(email)
    if not normalized:
        raise ValueError("user email must not be empty")
    return normalized


class UserService:
    """Manage users and check their credentials."""

    @classmethod
    @run_in_thread
    def create_user(cls, data: UserCreate, conn: Optional[PGConnection] = None) -> UserRead:
        email = _require_email(data.email)
        role = require_text(data.role, "role")
        password = require_text(data.password, "password")
        name = blank_to_none(data.name)
        logger.info("Registering user %s", email)
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("user", email):
                cursor.execute(
                    "SELECT neuromkt.i_usuario(%s, %s, %s, %s)",
                    (email, name, role, password),
                )
        return UserRead(email=email, name=name or "", role=role, active=True)

    @classmethod
    @run_in_thread
    def list_users(cls, conn: Optional[PGConnection] = None) -> List[UserRead]:
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute("SELECT * FROM neuromkt.l_usuarios()")
            rows = cursor.fetchall()
        return [cls._row_to_user(row) for row in rows]

    @classmethod
    @run_in_thread
    def update_user(cls, email: str, data: UserUpdate, conn: Optional[PGConnection] = None) -> None:
        """Update name, role, active flag and/or password.

        Blank or omitted text values are sent as ``NULL`` so the stored
        function keeps what is there; none of these fields can be
        cleared.
        """
        email = _require_email(email)
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.u_usuario(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS boolean),
                    CAST(%s AS varchar)
                )
                """,
                (
                    email,
                    blank_to_none(data.name),
                    blank_to_none(data.role),
                    data.active,
                    blank_to_none(data.password),
                ),
            )
        logger.info("Updated user %s", email)

    @classmethod
    @run_in_thread
    def delete_user(cls, email: str, conn: Optional[PGConnection] = None) -> None:
        email = _require_email(email)
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_usuario(%s)", (email,))
        logger.info("Deleted user %s", email)

    @classmethod
    @run_in_thread
    def login(cls, email: str, password: str, conn: Optional[PGConnection] = None) -> LoginResult:
        """Check credentials with ``neuromkt.f_login_usuario``.

        An unknown email is a failed login, not an error, whether the
        function reports it with ``ok = false``, with no row or by
        raising ``no_data_found``.
        """
        email = normalize_email(email)
        if not email or not password:
            return LoginResult(ok=False, role=None)
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            try:
                cursor.execute(
                    "SELECT ok, rol FROM neuromkt.f_login_usuario(%s, %s)",
                    (email, password),
                )
                row = cursor.fetchone()
            except pg_errors.NoDataFound:
                row = None
        if not row or not row.get("ok"):
            logger.info("Failed login for %s", email)
            return LoginResult(ok=False, role=None)
        return LoginResult(ok=True, role=row.get("rol"))

    @classmethod
    @run_in_thread
    def get_profile(cls, email: str, conn: Optional[PGConnection] = None) -> Optional[UserRead]:
        """Profile of one user; the password column is never selected."""
        email = normalize_email(email)
        if not email:
            return None
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                "SELECT email, nombre, rol, activo FROM neuromkt.usuarios WHERE email = %s",
                (email,),
            )
            row = cursor.fetchone()
        return cls._row_to_user(row) if row else None

    @staticmethod
    def _row_to_user(row) -> UserRead:
        return UserRead(
            email=row["email"],
            name=row.get("nombre") or "",
            role=row.get("rol") or "",
            active=row.get("activo"),
        )
