"""
Service layer for fragrances.

Fragrances are owned by the user that created them.  Codes are
generated by ``neuromkt.i_fragancia`` when the caller does not supply
one; a supplied code that already exists surfaces as
``ConflictError``.

Updates follow the store's partial-update convention: an omitted field
is sent as ``NULL`` (kept), a blank ``provider``/``description`` as
``''`` (cleared).  The name is required and can only be replaced.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, returned_code, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate, require_text
from neuromkt_api.app.core.fields import FieldUpdate, blank_to_none, normalize_email
from neuromkt_api.app.schemas.fragrance import FragranceCreate, FragranceRead, FragranceUpdate

logger = logging.getLogger(__name__)


class FragranceService:
    """CRUD operations for fragrances."""

    @classmethod
    @run_in_thread
    def create_fragrance(cls, data: FragranceCreate, conn: Optional[PGConnection] = None) -> str:
        """Insert a fragrance and return its code."""
        name = require_text(data.name, "name")
        code = blank_to_none(data.code)
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("fragrance", code):
                cursor.execute(
                    """
                    SELECT neuromkt.i_fragancia(
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
        new_code = returned_code(row[0] if row else None, "i_fragancia")
        logger.info("Created fragrance %s", new_code)
        return new_code

    @classmethod
    @run_in_thread
    def list_fragrances(
        cls, created_by: Optional[str] = None, conn: Optional[PGConnection] = None
    ) -> List[FragranceRead]:
        """List fragrances, optionally only those created by one user."""
        creator = normalize_email(created_by) or None
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                "SELECT * FROM neuromkt.f_fragancias(p_creado_por => CAST(%s AS varchar))",
                (creator,),
            )
            rows = cursor.fetchall()
        return [cls._row_to_fragrance(row) for row in rows]

    @classmethod
    @run_in_thread
    def get_fragrance(cls, code: str, conn: Optional[PGConnection] = None) -> Optional[FragranceRead]:
        code = require_text(code, "code")
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(
                """
                SELECT codigo, nombre, proveedor, descripcion, creado_por
                FROM neuromkt.fragancias
                WHERE codigo = %s
                """,
                (code,),
            )
            row = cursor.fetchone()
        return cls._row_to_fragrance(row) if row else None

    @classmethod
    @run_in_thread
    def update_fragrance(
        cls, code: str, data: FragranceUpdate, conn: Optional[PGConnection] = None
    ) -> None:
        code = require_text(code, "code")
        name = FieldUpdate.of_model(data, "name", clearable=False)
        provider = FieldUpdate.of_model(data, "provider")
        description = FieldUpdate.of_model(data, "description")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute(
                """
                SELECT neuromkt.u_fragancia(
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar),
                    CAST(%s AS varchar)
                )
                """,
                (code, name.to_param(), provider.to_param(), description.to_param()),
            )
        logger.info("Updated fragrance %s", code)

    @classmethod
    @run_in_thread
    def delete_fragrance(cls, code: str, conn: Optional[PGConnection] = None) -> None:
        code = require_text(code, "code")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_fragancia(CAST(%s AS varchar))", (code,))
        logger.info("Deleted fragrance %s", code)

    @staticmethod
    def _row_to_fragrance(row) -> FragranceRead:
        return FragranceRead(
            code=row["codigo"],
            name=row["nombre"],
            provider=row.get("proveedor"),
            description=row.get("descripcion"),
            created_by=row.get("creado_por"),
        )
