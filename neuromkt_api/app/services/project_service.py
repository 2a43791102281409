"""
Service layer for projects.

A project is a fragrance evaluation study.  Its code is generated by
``neuromkt.i_proyecto`` unless the caller supplies one; everything
about sequencing and uniqueness is decided by the database.

Deleting a project is a plain ``DELETE``; rows that depend on it are
handled by the database's foreign keys.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate, require_text
from neuromkt_api.app.core.fields import FieldUpdate, blank_to_none, normalize_email
from neuromkt_api.app.schemas.project import ProjectCreate, ProjectRead, ProjectSummary, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectService:
    """Create, list, update and delete projects."""

    @classmethod
    @run_in_thread
    def create_project(cls, data: ProjectCreate, conn: Optional[PGConnection] = None) -> str:
        """Insert a project and return its code.

        A blank ``code`` is sent as ``NULL`` so the database generates
        the next one.
        """
        name = require_text(data.name, "name")
        code = blank_to_none(data.code)
        logger.debug("Creating project name=%s provider=%s created_by=%s", name, data.provider, data.created_by)
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("project", code):
                cursor.execute(
                    """
                    SELECT neuromkt.i_proyecto(
                        CAST(%s AS varchar),
                        CAST(%s AS varchar),
                        CAST(%s AS varchar),
                        CAST(%s AS varchar),
                        CAST(%s AS varchar)
                    )
                    """,
                    (
                        code,
                        name,
                        blank_to_none(data.provider),
                        blank_to_none(data.description),
                        normalize_email(data.created_by) or None,
                    ),
                )
                row = cursor.fetchone()
        new_code = returned_code(row[0] if row else None, "i_proyecto")
        logger.info("Created project %s", new_code)
        return new_code

    @classmethod
    @run_in_thread
    def list_projects(cls, conn: Optional[PGConnection] = None) -> List[ProjectRead]:
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute("SELECT * FROM neuromkt.l_proyectos()")
            rows = cursor.fetchall()
        return [cls._row_to_project(row) for row in rows]

    @classmethod
    @run_in_thread
    def list_project_summaries(cls, conn: Optional[PGConnection] = None) -> List[ProjectSummary]:
        """Projects with their participant counts, for the admin home page."""
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute("SELECT * FROM neuromkt.l_proyectos_resumen()")
            rows = cursor.fetchall()
        return [
            ProjectSummary(
                code=row["codigo"],
                name=row.get("nombre") or "",
                participant_count=int(row.get("num_participantes") or 0),
            )
            for row in rows
        ]

    @classmethod
    @run_in_thread
    def get_project(cls, code: str, conn: Optional[PGConnection] = None) -> Optional[ProjectRead]:
        code = require_text(code, "code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT codigo, nombre, proveedor, descripcion, creado_por, fecha_creacion
                FROM neuromkt.proyectos
                WHERE codigo = %s
                """,
                (code,),
            )
            row = cursor.fetchone()
        return cls._row_to_project(row) if row else None

    @classmethod
    @run_in_thread
    def update_project(cls, code: str, data: ProjectUpdate, conn: Optional[PGConnection] = None) -> str:
        """Apply a partial update and return the project code."""
        code = require_text(code, "code")
        name = FieldUpdate.of_model(data, "name", clearable=False)
        provider = FieldUpdate.of_model(data, "provider")
        description = FieldUpdate.of_model(data, "description")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.u_proyecto(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar)
                )
                """,
                (code, name.to_param(), provider.to_param(), description.to_param()),
            )
            row = cursor.fetchone()
        logger.info("Updated project %s", code)
        # u_proyecto may return void.
        return (str(row[0]).strip() if row and row[0] else "") or code

    @classmethod
    @run_in_thread
    def delete_project(cls, code: str, conn: Optional[PGConnection] = None) -> bool:
        """Delete a project; returns ``False`` when no row matched."""
        code = require_text(code, "code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("DELETE FROM neuromkt.proyectos WHERE codigo = %s", (code,))
            affected = cursor.rowcount
        if affected:
            logger.info("Deleted project %s", code)
        return affected > 0

    @staticmethod
    def _row_to_project(row) -> ProjectRead:
        return ProjectRead(
            code=row["codigo"],
            name=row.get("nombre") or "",
            provider=row.get("proveedor"),
            description=row.get("descripcion"),
            created_by=row.get("creado_por"),
            created_at=row.get("fecha_creacion"),
        )
