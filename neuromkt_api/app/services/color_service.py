"""
Service layer for the shared color catalog.

Colors are keyed by their ``hex`` string and carry a display name.
All writes go through the ``neuromkt.i_color``, ``u_color`` and
``d_color`` stored functions; listing uses ``neuromkt.l_colores``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate, require_text
from neuromkt_api.app.core.fields import blank_to_none
from neuromkt_api.app.schemas.catalog import ColorCreate, ColorRead, ColorUpdate

logger = logging.getLogger(__name__)


class ColorService:
    """CRUD operations for the color catalog."""

    @classmethod
    @run_in_thread
    def list_colors(cls, conn: Optional[PGConnection] = None) -> List[ColorRead]:
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute("SELECT * FROM neuromkt.l_colores()")
            rows = cursor.fetchall()
        # A NULL name is shown as an empty string.
        return [ColorRead(hex=row["hex"], name=row.get("nombre") or "") for row in rows]

    @classmethod
    @run_in_thread
    def create_color(cls, data: ColorCreate, conn: Optional[PGConnection] = None) -> ColorRead:
        """Insert a color.

        The hex value is trimmed.  When no name is given the color is
        named ``"Color <hex>"``.
        """
        hex_value = require_text(data.hex, "hex")
        name = blank_to_none(data.name) or f"Color {hex_value}"
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("color", hex_value):
                cursor.execute(
                    "SELECT neuromkt.i_color(CAST(%s AS varchar), CAST(%s AS varchar))",
                    (hex_value, name),
                )
        logger.info("Created color %s", hex_value)
        return ColorRead(hex=hex_value, name=name)

    @classmethod
    @run_in_thread
    def update_color(
        cls, original_hex: str, data: ColorUpdate, conn: Optional[PGConnection] = None
    ) -> None:
        """Change the hex and/or the name of a color.

        Blank values are sent as ``NULL`` so the stored function keeps
        the current hex or name.
        """
        original = require_text(original_hex, "hex")
        new_hex = blank_to_none(data.hex)
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("color", new_hex):
                cursor.execute(
                    """
                    SELECT neuromkt.u_color(
                        CAST(%s AS varchar),
                        CAST(%s AS varchar),
                        CAST(%s AS varchar)
                    )
                    """,
                    (original, new_hex, blank_to_none(data.name)),
                )
        logger.info("Updated color %s", original)

    @classmethod
    @run_in_thread
    def delete_color(cls, hex_value: str, conn: Optional[PGConnection] = None) -> None:
        hex_value = require_text(hex_value, "hex")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_color(CAST(%s AS varchar))", (hex_value,))
        logger.info("Deleted color %s", hex_value)
