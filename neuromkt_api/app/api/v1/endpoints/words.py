"""
Word catalog endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import ADMIN_ROLE, get_current_user, require_roles
from neuromkt_api.app.schemas.catalog import WordCreate, WordRead, WordUpdate
from neuromkt_api.app.services.word_service import WordService

router = APIRouter()


@router.get("/", response_model=List[WordRead])
async def list_words(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[WordRead]:
    return await WordService.list_words(conn=conn)


@router.post("/", response_model=WordRead, status_code=status.HTTP_201_CREATED)
async def create_word(
    word_in: WordCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> WordRead:
    return await WordService.create_word(word_in.word, conn=conn)


@router.put("/{word}", response_model=WordRead)
async def update_word(
    word: str,
    word_in: WordUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> WordRead:
    """Rename a word everywhere it is used."""
    return await WordService.update_word(word, word_in.word, conn=conn)


@router.delete("/{word}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_word(
    word: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    await WordService.delete_word(word, conn=conn)
