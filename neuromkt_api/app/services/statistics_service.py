"""
Service layer for result statistics.

Every aggregate is computed by a ``neuromkt.f_*`` function; this module
only passes the project code (and, optionally, one fragrance code) and
reshapes the returned rows into ``Observation`` records.  Row order is
the store's (descending count) and is never changed here.

Without a fragrance filter the single-argument form of each function
is called, so the rows are exactly the store's project-wide
projection.  With a filter the fragrance code is passed as the second
argument.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, run_in_thread
from neuromkt_api.app.core.errors import require_text
from neuromkt_api.app.core.fields import blank_to_none
from neuromkt_api.app.schemas.result import Observation, StatisticsSummary

logger = logging.getLogger(__name__)

COLOR = "color"
WORD = "palabra"

NO_GENDER = "Sin género"
NO_AGE = "Sin edad"


@dataclass(frozen=True)
class _Projection:
    kind: str
    function: str
    value_column: str
    group_column: Optional[str] = None
    missing_group: Optional[str] = None


PROJECTIONS: Dict[str, _Projection] = {
    "colors": _Projection(COLOR, "f_estadisticas_colores_proyecto", "color_hex"),
    "words": _Projection(WORD, "f_estadisticas_palabras_proyecto", "palabra"),
    "colors_by_gender": _Projection(COLOR, "f_colores_por_genero", "color_hex", "genero", NO_GENDER),
    "colors_by_age": _Projection(COLOR, "f_colores_por_edad", "color_hex", "rango_edad", NO_AGE),
    "words_by_gender": _Projection(
        WORD, "f_estadisticas_palabras_por_genero_proyecto", "palabra", "genero", NO_GENDER
    ),
    "words_by_age": _Projection(
        WORD, "f_estadisticas_palabras_por_edad_proyecto", "palabra", "rango_edad", NO_AGE
    ),
}


class StatisticsService:
    """Read-only aggregate projections over the results of a project."""

    @classmethod
    @run_in_thread
    def colors(cls, project_code: str, fragrance_code: Optional[str] = None,
               conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("colors", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def words(cls, project_code: str, fragrance_code: Optional[str] = None,
              conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("words", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def colors_by_gender(cls, project_code: str, fragrance_code: Optional[str] = None,
                         conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("colors_by_gender", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def colors_by_age(cls, project_code: str, fragrance_code: Optional[str] = None,
                      conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("colors_by_age", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def words_by_gender(cls, project_code: str, fragrance_code: Optional[str] = None,
                        conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("words_by_gender", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def words_by_age(cls, project_code: str, fragrance_code: Optional[str] = None,
                     conn: Optional[PGConnection] = None) -> List[Observation]:
        return cls._fetch("words_by_age", project_code, fragrance_code, conn)

    @classmethod
    @run_in_thread
    def summary(cls, project_code: str, fragrance_code: Optional[str] = None,
                conn: Optional[PGConnection] = None) -> StatisticsSummary:
        """All six projections for one project, read on a single connection."""
        project_code = require_text(project_code, "project code")
        fragrance_code = blank_to_none(fragrance_code)
        with connection_scope(conn) as db:
            sections = {
                name: cls._fetch(name, project_code, fragrance_code, db)
                for name in PROJECTIONS
            }
        return StatisticsSummary(project_code=project_code, fragrance_code=fragrance_code, **sections)

    @classmethod
    def _fetch(cls, name: str, project_code: str, fragrance_code: Optional[str],
               conn: Optional[PGConnection]) -> List[Observation]:
        projection = PROJECTIONS[name]
        project_code = require_text(project_code, "project code")
        fragrance_code = blank_to_none(fragrance_code)
        if fragrance_code is None:
            sql = f"SELECT * FROM neuromkt.{projection.function}(CAST(%s AS varchar))"
            params: tuple = (project_code,)
        else:
            sql = f"SELECT * FROM neuromkt.{projection.function}(CAST(%s AS varchar), CAST(%s AS varchar))"
            params = (project_code, fragrance_code)
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute(sql, params)
            rows = cursor.fetchall()
        logger.debug("%s(%s, %s) -> %d rows", projection.function, project_code, fragrance_code, len(rows))
        return [cls._row_to_observation(projection, row) for row in rows]

    @staticmethod
    def _row_to_observation(projection: _Projection, row) -> Observation:
        group = None
        if projection.group_column is not None:
            group = row.get(projection.group_column) or projection.missing_group
        return Observation(
            kind=projection.kind,
            group=group,
            value=row.get(projection.value_column) or "",
            count=int(row.get("total") or 0),
        )
