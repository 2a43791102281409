"""
Participant endpoints for API v1.

Participants are identified by their email for lookups, updates and
deletion; emails are trimmed and lower-cased before they reach the
database, so ``/participants/by-email/Jane@Test.com`` and
``/participants/by-email/jane@test.com`` address the same row.  The
generated code (``U<n>``) is also accepted for lookups.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import get_current_user
from neuromkt_api.app.schemas.participant import ParticipantCreate, ParticipantRead, ParticipantUpdate
from neuromkt_api.app.schemas.project import CodeRead
from neuromkt_api.app.services.participant_service import ParticipantService

router = APIRouter()


@router.get("/", response_model=List[ParticipantRead])
async def list_participants(
    mine: bool = Query(False, description="Only participants registered by the caller"),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ParticipantRead]:
    created_by = current_user.get("sub") if mine else None
    return await ParticipantService.list_participants(created_by=created_by, conn=conn)


@router.post("/", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def create_participant(
    participant_in: ParticipantCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CodeRead:
    """Register a participant and return the generated code."""
    if not (participant_in.created_by or "").strip():
        participant_in = participant_in.model_copy(update={"created_by": current_user.get("sub")})
    code = await ParticipantService.create_participant(participant_in, conn=conn)
    return CodeRead(code=code)


@router.get("/by-email/{email}", response_model=ParticipantRead)
async def get_participant_by_email(
    email: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ParticipantRead:
    participant = await ParticipantService.get_by_email(email, conn=conn)
    if participant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return participant


@router.patch("/by-email/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def update_participant(
    email: str,
    participant_in: ParticipantUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> None:
    """Partially update a participant.

    Omitted fields are kept; ``null`` or ``""`` clears ``gender`` and
    ``notes``.  The birth date can be changed but not cleared.
    """
    await ParticipantService.update_participant(email, participant_in, conn=conn)


@router.delete("/by-email/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_participant(
    email: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> None:
    await ParticipantService.delete_participant(email, conn=conn)


@router.get("/{code}", response_model=ParticipantRead)
async def get_participant(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ParticipantRead:
    participant = await ParticipantService.get_by_code(code, conn=conn)
    if participant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return participant
