"""
Test ("prueba") endpoints for API v1.

A test is created for one participant in one project, then results
are recorded against its code.  The participant may be given by code
or by email.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import get_current_user
from neuromkt_api.app.schemas.project import CodeRead
from neuromkt_api.app.schemas.result import ResultRead
from neuromkt_api.app.schemas.trial import TrialCreate, TrialDateUpdate
from neuromkt_api.app.services.result_service import ResultService
from neuromkt_api.app.services.trial_service import TrialService

router = APIRouter()


@router.post("/", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def create_trial(
    trial_in: TrialCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CodeRead:
    code = await TrialService.create_trial(
        trial_in.project_code,
        participant_code=trial_in.participant_code,
        participant_email=trial_in.participant_email,
        conn=conn,
    )
    return CodeRead(code=code)


@router.put("/{code}/date", response_model=CodeRead)
async def update_trial_date(
    code: str,
    date_in: Optional[TrialDateUpdate] = None,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CodeRead:
    """Re-date a test; without a body or ``tested_at`` the database stamps the current time."""
    tested_at = date_in.tested_at if date_in is not None else None
    updated = await TrialService.update_trial_date(code, tested_at, conn=conn)
    return CodeRead(code=updated)


@router.get("/{code}/results", response_model=List[ResultRead])
async def list_trial_results(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ResultRead]:
    return await ResultService.list_by_trial(code, conn=conn)


@router.get("/{code}/has-results", response_model=bool)
async def trial_has_results(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> bool:
    return await ResultService.exists_for_trial(code, conn=conn)
