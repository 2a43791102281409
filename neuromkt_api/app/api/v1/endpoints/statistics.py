"""
Statistics endpoints for API v1.

Six projections are available for a project: ``colors``, ``words``,
``colors_by_gender``, ``colors_by_age``, ``words_by_gender`` and
``words_by_age``.  Each accepts an optional ``fragrance`` query
parameter restricting the aggregation to tests of that fragrance.
Rows come back in the database's order (descending count).

``/statistics/{project}`` returns all six at once and
``/statistics/{project}/export.csv`` downloads them as a
semicolon-separated file.
"""

from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import get_current_user
from neuromkt_api.app.schemas.result import Observation, StatisticsSummary
from neuromkt_api.app.services.export_service import Column, ExportService
from neuromkt_api.app.services.statistics_service import PROJECTIONS, StatisticsService

router = APIRouter()

Projection = Enum("Projection", {name: name for name in PROJECTIONS}, type=str)

SUMMARY_CSV_COLUMNS = (
    Column("seccion", "section"),
    Column("tipo", "kind"),
    Column("grupo", "group"),
    Column("valor", "value"),
    Column("total", "count"),
)


@router.get("/{project_code}", response_model=StatisticsSummary)
async def get_summary(
    project_code: str,
    fragrance: Optional[str] = Query(None),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> StatisticsSummary:
    return await StatisticsService.summary(project_code, fragrance, conn=conn)


@router.get("/{project_code}/export.csv")
async def export_summary(
    project_code: str,
    fragrance: Optional[str] = Query(None),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> Response:
    """All projections flattened into one CSV, one line per observation."""
    summary = await StatisticsService.summary(project_code, fragrance, conn=conn)
    rows = [
        {"section": name, **observation.model_dump()}
        for name in PROJECTIONS
        for observation in getattr(summary, name)
    ]
    content = ExportService.to_csv(rows, SUMMARY_CSV_COLUMNS)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="estadisticas_{project_code}.csv"'},
    )


@router.get("/{project_code}/{projection}", response_model=List[Observation])
async def get_projection(
    project_code: str,
    projection: Projection,
    fragrance: Optional[str] = Query(None),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[Observation]:
    fetch = getattr(StatisticsService, projection.value)
    return await fetch(project_code, fragrance, conn=conn)
