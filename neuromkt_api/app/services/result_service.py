"""
Service layer for results.

A result is one (color, word) pick recorded for a test.  Results are
append-only: the application inserts them through
``neuromkt.i_resultado`` and reads them back, it never edits them.
The project CSV export comes from ``neuromkt.f_resultados_proyecto_csv``
rendered by ``ExportService``.
"""

from __future__ import annotations

import logging
from operator import itemgetter
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import require_text
from neuromkt_api.app.schemas.result import ResultCreate, ResultRead
from neuromkt_api.app.services.export_service import Column, ExportService

logger = logging.getLogger(__name__)

PROJECT_CSV_COLUMNS = (
    Column("usuario", itemgetter(0)),
    Column("color", itemgetter(1)),
    Column("palabra", itemgetter(2)),
)


class ResultService:
    """Record and read back color/word picks."""

    @classmethod
    @run_in_thread
    def create_result(cls, data: ResultCreate, conn: Optional[PGConnection] = None) -> str:
        """Insert a result and return its generated code."""
        trial_code = require_text(data.trial_code, "test code")
        hex_value = require_text(data.hex, "hex")
        word = require_text(data.word, "word")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.i_resultado(
                    p_codigo        => CAST(%s AS varchar),
                    p_prueba_codigo => CAST(%s AS varchar),
                    p_color_hex     => CAST(%s AS varchar),
                    p_palabra       => CAST(%s AS varchar)
                )
                """,
                (None, trial_code, hex_value, word),
            )
            row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_resultado")
        logger.info("Recorded result %s for test %s", code, trial_code)
        return code

    @classmethod
    @run_in_thread
    def list_by_trial(cls, trial_code: str, conn: Optional[PGConnection] = None) -> List[ResultRead]:
        trial_code = require_text(trial_code, "test code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT codigo, prueba_codigo, color_hex, palabra
                FROM neuromkt.resultados
                WHERE prueba_codigo = %s
                ORDER BY codigo
                """,
                (trial_code,),
            )
            rows = cursor.fetchall()
        return [cls._row_to_result(row) for row in rows]

    @classmethod
    @run_in_thread
    def list_by_project(
        cls,
        project_code: str,
        conn: Optional[PGConnection] = None,
    ) -> List[ResultRead]:
        """Raw results of a project with the participant email."""
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT r.codigo, r.prueba_codigo, r.color_hex, r.palabra, pa.email
                FROM neuromkt.resultados r
                JOIN neuromkt.pruebas pr ON pr.codigo = r.prueba_codigo
                JOIN neuromkt.participantes pa ON pa.codigo = pr.participante_codigo
                WHERE pr.proyecto_codigo = %s
                ORDER BY pa.email, r.codigo
                """,
                (project_code,),
            )
            rows = cursor.fetchall()
        return [cls._row_to_result(row) for row in rows]

    @classmethod
    @run_in_thread
    def exists_for_trial(cls, trial_code: str, conn: Optional[PGConnection] = None) -> bool:
        trial_code = require_text(trial_code, "test code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                "SELECT EXISTS(SELECT 1 FROM neuromkt.resultados WHERE prueba_codigo = %s)",
                (trial_code,),
            )
            row = cursor.fetchone()
        return bool(row and row[0])

    @classmethod
    @run_in_thread
    def project_csv(cls, project_code: str, conn: Optional[PGConnection] = None) -> str:
        """CSV (``usuario,color,palabra``) of every result in a project."""
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT * FROM neuromkt.f_resultados_proyecto_csv(%s)", (project_code,))
            rows = cursor.fetchall()
        return ExportService.to_csv(rows, PROJECT_CSV_COLUMNS, delimiter=",")

    @staticmethod
    def _row_to_result(row) -> ResultRead:
        return ResultRead(
            code=row["codigo"],
            trial_code=row["prueba_codigo"],
            hex=row.get("color_hex") or "",
            word=row.get("palabra") or "",
            participant_email=row.get("email"),
        )
