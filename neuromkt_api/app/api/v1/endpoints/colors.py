"""
Color catalog endpoints for API v1.

Any authenticated user may list the catalog; only administrators may
change it.  Colors are addressed by their hex value, so clients must
percent-encode the leading ``#`` (``/colors/%23FF00AA``).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import ADMIN_ROLE, get_current_user, require_roles
from neuromkt_api.app.schemas.catalog import ColorCreate, ColorRead, ColorUpdate
from neuromkt_api.app.services.color_service import ColorService

router = APIRouter()


@router.get("/", response_model=List[ColorRead])
async def list_colors(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ColorRead]:
    return await ColorService.list_colors(conn=conn)


@router.post("/", response_model=ColorRead, status_code=status.HTTP_201_CREATED)
async def create_color(
    color_in: ColorCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> ColorRead:
    """Add a color; a blank name becomes ``Color <hex>``."""
    return await ColorService.create_color(color_in, conn=conn)


@router.put("/{hex_value}", status_code=status.HTTP_204_NO_CONTENT)
async def update_color(
    hex_value: str,
    color_in: ColorUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    await ColorService.update_color(hex_value, color_in, conn=conn)


@router.delete("/{hex_value}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_color(
    hex_value: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    await ColorService.delete_color(hex_value, conn=conn)
