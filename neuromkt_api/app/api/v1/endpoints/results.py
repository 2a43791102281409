"""
Result endpoints for API v1.

Results are append-only.  Reading them back is done per test
(``/trials/{code}/results``) or per project
(``/projects/{code}/results``).
"""

from fastapi import APIRouter, Depends, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import get_current_user
from neuromkt_api.app.schemas.project import CodeRead
from neuromkt_api.app.schemas.result import ResultCreate
from neuromkt_api.app.services.result_service import ResultService

router = APIRouter()


@router.post("/", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def create_result(
    result_in: ResultCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CodeRead:
    """Record the color and word picked in a test."""
    code = await ResultService.create_result(result_in, conn=conn)
    return CodeRead(code=code)
