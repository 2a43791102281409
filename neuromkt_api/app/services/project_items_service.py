"""
Service layer for the project association rows.

Projects reference catalog items through three junction tables:

* ``neuromkt.proyectos_colores``   -- codes ``PC<n>``
* ``neuromkt.proyectos_palabras``  -- codes ``PP<n>``
* ``neuromkt.proyectos_fragancias`` -- codes ``PF<n>``

Rows are created by ``i_proyecto_color``, ``i_proyecto_palabra`` and
``i_proyecto_fragancia`` with a ``NULL`` code so the database assigns
the next one.  The database also checks that both sides of the link
exist; any unique violation while linking is reported as a store
error, since no identifier came from the caller.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import require_text
from neuromkt_api.app.schemas.project import ProjectColorRead, ProjectFragranceRead, ProjectWordRead

logger = logging.getLogger(__name__)


class ProjectColorService:
    """Colors offered within a project."""

    @classmethod
    @run_in_thread
    def add_color(cls, project_code: str, hex_value: str, conn: Optional[PGConnection] = None) -> str:
        project_code = require_text(project_code, "project code")
        hex_value = require_text(hex_value, "hex")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.i_proyecto_color(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar)
                )
                """,
                (project_code, hex_value, None),
            )
            row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_proyecto_color")
        logger.info("Linked color %s to project %s as %s", hex_value, project_code, code)
        return code

    @classmethod
    @run_in_thread
    def list_colors(cls, project_code: str, conn: Optional[PGConnection] = None) -> List[ProjectColorRead]:
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT codigo, proyecto_codigo, color_hex
                FROM neuromkt.proyectos_colores
                WHERE proyecto_codigo = %s
                ORDER BY codigo
                """,
                (project_code,),
            )
            rows = cursor.fetchall()
        return [
            ProjectColorRead(code=row["codigo"], project_code=row["proyecto_codigo"], hex=row["color_hex"])
            for row in rows
        ]

    @classmethod
    @run_in_thread
    def remove_color(cls, code: str, conn: Optional[PGConnection] = None) -> bool:
        code = require_text(code, "code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("DELETE FROM neuromkt.proyectos_colores WHERE codigo = %s", (code,))
            return cursor.rowcount > 0


class ProjectWordService:
    """Words offered within a project."""

    @classmethod
    @run_in_thread
    def add_word(cls, project_code: str, word: str, conn: Optional[PGConnection] = None) -> str:
        project_code = require_text(project_code, "project code")
        word = require_text(word, "word")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.i_proyecto_palabra(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar)
                )
                """,
                (project_code, word, None),
            )
            row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_proyecto_palabra")
        logger.info("Linked word %s to project %s as %s", word, project_code, code)
        return code

    @classmethod
    @run_in_thread
    def list_words(cls, project_code: str, conn: Optional[PGConnection] = None) -> List[ProjectWordRead]:
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT codigo, proyecto_codigo, palabra
                FROM neuromkt.proyectos_palabras
                WHERE proyecto_codigo = %s
                ORDER BY codigo
                """,
                (project_code,),
            )
            rows = cursor.fetchall()
        return [
            ProjectWordRead(code=row["codigo"], project_code=row["proyecto_codigo"], word=row["palabra"])
            for row in rows
        ]

    @classmethod
    @run_in_thread
    def remove_word(cls, code: str, conn: Optional[PGConnection] = None) -> bool:
        code = require_text(code, "code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("DELETE FROM neuromkt.proyectos_palabras WHERE codigo = %s", (code,))
            return cursor.rowcount > 0


class ProjectFragranceService:
    """Fragrances evaluated within a project."""

    @classmethod
    @run_in_thread
    def add_fragrance(
        cls, project_code: str, fragrance_code: str, conn: Optional[PGConnection] = None
    ) -> str:
        project_code = require_text(project_code, "project code")
        fragrance_code = require_text(fragrance_code, "fragrance code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.i_proyecto_fragancia(
                    p_codigo           => CAST(%s AS varchar),
                    p_proyecto_codigo  => CAST(%s AS varchar),
                    p_fragancia_codigo => CAST(%s AS varchar)
                )
                """,
                (None, project_code, fragrance_code),
            )
            row = cursor.fetchone()
        code = returned_code(row[0] if row else None, "i_proyecto_fragancia")
        logger.info("Linked fragrance %s to project %s as %s", fragrance_code, project_code, code)
        return code

    @classmethod
    @run_in_thread
    def list_fragrances(
        cls, project_code: str, conn: Optional[PGConnection] = None
    ) -> List[ProjectFragranceRead]:
        """Fragrances of a project, ordered by fragrance name."""
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT pf.codigo, pf.fragancia_codigo, f.nombre
                FROM neuromkt.f_proyecto_fragancias(%s) pf
                JOIN neuromkt.fragancias f ON f.codigo = pf.fragancia_codigo
                ORDER BY f.nombre
                """,
                (project_code,),
            )
            rows = cursor.fetchall()
        return [
            ProjectFragranceRead(
                code=row["codigo"],
                project_code=project_code,
                fragrance_code=row["fragancia_codigo"],
                fragrance_name=row.get("nombre"),
            )
            for row in rows
        ]

    @classmethod
    @run_in_thread
    def delete_for_project(cls, project_code: str, conn: Optional[PGConnection] = None) -> None:
        project_code = require_text(project_code, "project code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_proyecto_fragancias(CAST(%s AS varchar))", (project_code,))
        logger.info("Removed all fragrances from project %s", project_code)
