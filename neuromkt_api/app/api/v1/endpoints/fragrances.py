"""
Fragrance endpoints for API v1.

Fragrances carry an optional creator email.  When a client omits
``created_by`` on creation, the email of the authenticated caller is
recorded.  ``GET /fragrances/?mine=true`` lists only the caller's own
fragrances.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import get_current_user
from neuromkt_api.app.schemas.fragrance import FragranceCreate, FragranceRead, FragranceUpdate
from neuromkt_api.app.schemas.project import CodeRead
from neuromkt_api.app.services.fragrance_service import FragranceService

router = APIRouter()


@router.get("/", response_model=List[FragranceRead])
async def list_fragrances(
    mine: bool = Query(False, description="Only fragrances created by the caller"),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[FragranceRead]:
    created_by = current_user.get("sub") if mine else None
    return await FragranceService.list_fragrances(created_by=created_by, conn=conn)


@router.get("/{code}", response_model=FragranceRead)
async def get_fragrance(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> FragranceRead:
    fragrance = await FragranceService.get_fragrance(code, conn=conn)
    if fragrance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fragrance not found")
    return fragrance


@router.post("/", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def create_fragrance(
    fragrance_in: FragranceCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CodeRead:
    """Create a fragrance and return its (possibly generated) code."""
    if not (fragrance_in.created_by or "").strip():
        fragrance_in = fragrance_in.model_copy(update={"created_by": current_user.get("sub")})
    code = await FragranceService.create_fragrance(fragrance_in, conn=conn)
    return CodeRead(code=code)


@router.patch("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def update_fragrance(
    code: str,
    fragrance_in: FragranceUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> None:
    """Partially update a fragrance.

    Omitted fields are kept; ``null`` or ``""`` clears ``provider`` and
    ``description``.  The name cannot be cleared.
    """
    await FragranceService.update_fragrance(code, fragrance_in, conn=conn)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fragrance(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> None:
    await FragranceService.delete_fragrance(code, conn=conn)
