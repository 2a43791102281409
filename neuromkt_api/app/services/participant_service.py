"""
Service layer for participants.

Participants are identified by a generated code (``U01``...) and by a
unique email.  Every email is trimmed and lower-cased before it is
written or compared, so ``" Jane@Test.com "`` and ``"jane@test.com"``
always resolve to the same participant.

``u_participante`` treats ``NULL`` as "keep" and ``''`` as "clear" for
gender and notes; the birth date can be replaced but not cleared.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate
from neuromkt_api.app.core.fields import FieldUpdate, blank_to_none, normalize_email
from neuromkt_api.app.schemas.participant import ParticipantCreate, ParticipantRead, ParticipantUpdate

logger = logging.getLogger(__name__)

_COLUMNS = "codigo, email, fecha_nacimiento, genero, notas, creado_por"


def _require_email(email: Optional[str]) -> str:
    normalized = normalize_email(email)
    if not normalized:
        raise ValueError("participant email must not be empty")
    return normalized


class ParticipantService:
    """CRUD operations and lookups for participants."""

    @classmethod
    @run_in_thread
    def create_participant(cls, data: ParticipantCreate, conn: Optional[PGConnection] = None) -> str:
        """Register a participant and return the generated code."""
        email = _require_email(data.email)
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("participant", email):
                cursor.execute(
                    """
                    SELECT neuromkt.i_participante(
                        p_email            => CAST(%s AS varchar),
                        p_fecha_nacimiento => CAST(%s AS date),
                        p_genero           => CAST(%s AS varchar),
                        p_notas            => CAST(%s AS text),
                        p_creado_por       => CAST(%s AS varchar)
                    )
                    """,
                    (
                        email,
                        data.birth_date,
                        blank_to_none(data.gender),
                        blank_to_none(data.notes),
                        normalize_email(data.created_by) or None,
                    ),
                )
                row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_participante")
        logger.info("Registered participant %s (%s)", code, email)
        return code

    @classmethod
    @run_in_thread
    def list_participants(
        cls, created_by: Optional[str] = None, conn: Optional[PGConnection] = None
    ) -> List[ParticipantRead]:
        """All participants ordered by email, optionally for one creator."""
        creator = normalize_email(created_by) or None
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            if creator is None:
                cursor.execute(f"SELECT {_COLUMNS} FROM neuromkt.participantes ORDER BY email")
            else:
                cursor.execute(
                    f"SELECT {_COLUMNS} FROM neuromkt.participantes WHERE creado_por = %s ORDER BY email",
                    (creator,),
                )
            rows = cursor.fetchall()
        return [cls._row_to_participant(row) for row in rows]

    @classmethod
    @run_in_thread
    def get_by_email(cls, email: str, conn: Optional[PGConnection] = None) -> Optional[ParticipantRead]:
        email = normalize_email(email)
        if not email:
            return None
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                f"SELECT {_COLUMNS} FROM neuromkt.participantes WHERE email = %s",
                (email,),
            )
            row = cursor.fetchone()
        return cls._row_to_participant(row) if row else None

    @classmethod
    @run_in_thread
    def get_by_code(cls, code: str, conn: Optional[PGConnection] = None) -> Optional[ParticipantRead]:
        code = blank_to_none(code)
        if code is None:
            return None
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                f"SELECT {_COLUMNS} FROM neuromkt.participantes WHERE codigo = %s",
                (code,),
            )
            row = cursor.fetchone()
        return cls._row_to_participant(row) if row else None

    @classmethod
    @run_in_thread
    def list_available(
        cls,
        project_code: str,
        fragrance_code: Optional[str] = None,
        conn: Optional[PGConnection] = None,
    ) -> List[ParticipantRead]:
        """Participants that can still be tested in a project.

        Availability is decided by ``neuromkt.f_participantes_disponibles``;
        a blank fragrance code means "any fragrance".
        """
        project_code = blank_to_none(project_code)
        if project_code is None:
            raise ValueError("project code must not be empty")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT *
                FROM neuromkt.f_participantes_disponibles(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar)
                )
                """,
                (project_code, blank_to_none(fragrance_code)),
            )
            rows = cursor.fetchall()
        return [cls._row_to_participant(row) for row in rows]

    @classmethod
    @run_in_thread
    def update_participant(
        cls, email: str, data: ParticipantUpdate, conn: Optional[PGConnection] = None
    ) -> None:
        email = _require_email(email)
        birth_date = FieldUpdate.of_model(data, "birth_date", clearable=False)
        gender = FieldUpdate.of_model(data, "gender")
        notes = FieldUpdate.of_model(data, "notes")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.u_participante(
                    CAST(%s AS varchar),
                    CAST(%s AS date),
                    CAST(%s AS varchar),
                    CAST(%s AS text)
                )
                """,
                (email, birth_date.to_param(), gender.to_param(), notes.to_param()),
            )
        logger.info("Updated participant %s", email)

    @classmethod
    @run_in_thread
    def delete_participant(cls, email: str, conn: Optional[PGConnection] = None) -> None:
        email = _require_email(email)
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_participante(CAST(%s AS varchar))", (email,))
        logger.info("Deleted participant %s", email)

    @staticmethod
    def _row_to_participant(row) -> ParticipantRead:
        return ParticipantRead(
            code=row.get("codigo") or "",
            email=row.get("email") or "",
            birth_date=row.get("fecha_nacimiento"),
            gender=row.get("genero"),
            notes=row.get("notas"),
            created_by=row.get("creado_por"),
        )
