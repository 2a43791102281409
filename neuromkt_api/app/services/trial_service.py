"""
Service layer for tests ("pruebas").

A test binds one participant to one project; results are recorded
against it.  ``neuromkt.i_prueba`` generates the ``PRB<n>`` code.  The
participant may be given by code or by email: the email is normalized
and resolved to a code inside the same statement, so creating a test
is still a single round trip.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import require_text
from neuromkt_api.app.core.fields import blank_to_none, normalize_email
from neuromkt_api.app.schemas.trial import TrialRead

logger = logging.getLogger(__name__)


class TrialService:
    """Create, re-date, list and purge tests."""

    @classmethod
    @run_in_thread
    def create_trial(
        cls,
        project_code: str,
        participant_code: Optional[str] = None,
        participant_email: Optional[str] = None,
        conn: Optional[PGConnection] = None,
    ) -> str:
        """Create a test and return its code.

        ``participant_code`` wins over ``participant_email`` when both
        are given.
        """
        project_code = require_text(project_code, "project code")
        participant_code = blank_to_none(participant_code)
        email = normalize_email(participant_email) or None
        if participant_code is None and email is None:
            raise ValueError("participant code or email is required")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.i_prueba(
                    p_codigo              => CAST(%s AS varchar),
                    p_proyecto_codigo     => CAST(%s AS varchar),
                    p_participante_codigo => COALESCE(
                        CAST(%s AS varchar),
                        (SELECT codigo FROM neuromkt.participantes WHERE email = %s)
                    )
                )
                """,
                (None, project_code, participant_code, email),
            )
            row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_prueba")
        logger.info("Created test %s in project %s", code, project_code)
        return code

    @classmethod
    @run_in_thread
    def update_trial_date(
        cls, code: str, tested_at: Optional[datetime] = None, conn: Optional[PGConnection] = None
    ) -> str:
        """Set the date of a test; ``None`` lets the database use ``now()``."""
        code = require_text(code, "test code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.u_prueba(
                    p_codigo       => CAST(%s AS varchar),
                    p_fecha_prueba => CAST(%s AS timestamp)
                )
                """,
                (code, tested_at),
            )
            row = cursor.fetchone()
        return returned_code(row[0] if row else None, "u_prueba")

    @classmethod
    @run_in_thread
    def list_by_project(cls, project_code: str, conn: Optional[PGConnection] = None) -> List[TrialRead]:
        """Tests of a project with the participant email, ordered by email."""
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT pr.codigo,
                       pr.participante_codigo,
                       pa.email,
                       pr.fecha_prueba
                FROM neuromkt.pruebas pr
                JOIN neuromkt.participantes pa ON pa.codigo = pr.participante_codigo
                WHERE pr.proyecto_codigo = %s
                ORDER BY pa.email
                """,
                (project_code,),
            )
            rows = cursor.fetchall()
        return [
            TrialRead(
                code=row["codigo"],
                project_code=project_code,
                participant_code=row["participante_codigo"],
                participant_email=row.get("email"),
                tested_at=row.get("fecha_prueba"),
            )
            for row in rows
        ]

    @classmethod
    @run_in_thread
    def delete_for_project(cls, project_code: str, conn: Optional[PGConnection] = None) -> None:
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_pruebas_proyecto(CAST(%s AS varchar))", (project_code,))
        logger.info("Deleted all tests of project %s", project_code)
