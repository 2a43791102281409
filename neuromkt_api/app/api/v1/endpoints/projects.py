"""
Project endpoints for API v1.

Besides CRUD on projects themselves, a project exposes its association
rows (colors, words and fragrances offered in the study), its tests,
its raw results and a CSV export of those results.  Administrators
manage projects and their associations; any authenticated user may
read them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import ADMIN_ROLE, get_current_user, require_roles
from neuromkt_api.app.schemas.participant import ParticipantRead
from neuromkt_api.app.schemas.project import (
    CodeRead,
    ProjectColorCreate,
    ProjectColorRead,
    ProjectCreate,
    ProjectFragranceCreate,
    ProjectFragranceRead,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
    ProjectWordCreate,
    ProjectWordRead,
)
from neuromkt_api.app.schemas.result import ResultRead
from neuromkt_api.app.schemas.trial import TrialRead
from neuromkt_api.app.services.participant_service import ParticipantService
from neuromkt_api.app.services.project_items_service import (
    ProjectColorService,
    ProjectFragranceService,
    ProjectWordService,
)
from neuromkt_api.app.services.project_service import ProjectService
from neuromkt_api.app.services.result_service import ResultService
from neuromkt_api.app.services.trial_service import TrialService

router = APIRouter()


@router.get("/", response_model=List[ProjectRead])
async def list_projects(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectRead]:
    return await ProjectService.list_projects(conn=conn)


@router.get("/summary", response_model=List[ProjectSummary])
async def list_project_summaries(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectSummary]:
    """Code, name and participant count of every project."""
    return await ProjectService.list_project_summaries(conn=conn)


@router.get("/{code}", response_model=ProjectRead)
async def get_project(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ProjectRead:
    project = await ProjectService.get_project(code, conn=conn)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.post("/", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> CodeRead:
    """Create a project; leave ``code`` empty to have one generated."""
    if not (project_in.created_by or "").strip():
        project_in = project_in.model_copy(update={"created_by": current_user.get("sub")})
    code = await ProjectService.create_project(project_in, conn=conn)
    return CodeRead(code=code)


@router.patch("/{code}", response_model=CodeRead)
async def update_project(
    code: str,
    project_in: ProjectUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> CodeRead:
    """Partially update a project.

    Omitted fields are kept; ``null`` or ``""`` clears ``provider`` and
    ``description``.
    """
    updated = await ProjectService.update_project(code, project_in, conn=conn)
    return CodeRead(code=updated)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    deleted = await ProjectService.delete_project(code, conn=conn)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return None


# Colors of a project

@router.get("/{code}/colors", response_model=List[ProjectColorRead])
async def list_project_colors(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectColorRead]:
    return await ProjectColorService.list_colors(code, conn=conn)


@router.post("/{code}/colors", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def add_project_color(
    code: str,
    color_in: ProjectColorCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> CodeRead:
    link = await ProjectColorService.add_color(code, color_in.hex, conn=conn)
    return CodeRead(code=link)


@router.delete("/{code}/colors/{link_code}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_project_color(
    code: str,
    link_code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    if not await ProjectColorService.remove_color(link_code, conn=conn):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project color not found")
    return None


# Words of a project

@router.get("/{code}/words", response_model=List[ProjectWordRead])
async def list_project_words(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectWordRead]:
    return await ProjectWordService.list_words(code, conn=conn)


@router.post("/{code}/words", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def add_project_word(
    code: str,
    word_in: ProjectWordCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> CodeRead:
    link = await ProjectWordService.add_word(code, word_in.word, conn=conn)
    return CodeRead(code=link)


@router.delete("/{code}/words/{link_code}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_project_word(
    code: str,
    link_code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    if not await ProjectWordService.remove_word(link_code, conn=conn):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project word not found")
    return None


# Fragrances of a project

@router.get("/{code}/fragrances", response_model=List[ProjectFragranceRead])
async def list_project_fragrances(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ProjectFragranceRead]:
    return await ProjectFragranceService.list_fragrances(code, conn=conn)


@router.post("/{code}/fragrances", response_model=CodeRead, status_code=status.HTTP_201_CREATED)
async def add_project_fragrance(
    code: str,
    fragrance_in: ProjectFragranceCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> CodeRead:
    link = await ProjectFragranceService.add_fragrance(code, fragrance_in.fragrance_code, conn=conn)
    return CodeRead(code=link)


@router.delete("/{code}/fragrances", status_code=status.HTTP_204_NO_CONTENT)
async def remove_project_fragrances(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    """Unlink every fragrance from the project."""
    await ProjectFragranceService.delete_for_project(code, conn=conn)


# Participants, tests and results of a project

@router.get("/{code}/participants/available", response_model=List[ParticipantRead])
async def list_available_participants(
    code: str,
    fragrance: Optional[str] = Query(None, description="Restrict to one fragrance of the project"),
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ParticipantRead]:
    """Participants that can still be tested in this project."""
    return await ParticipantService.list_available(code, fragrance, conn=conn)


@router.get("/{code}/trials", response_model=List[TrialRead])
async def list_project_trials(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[TrialRead]:
    return await TrialService.list_by_project(code, conn=conn)


@router.delete("/{code}/trials", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_trials(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    """Delete every test of the project (and, through the database, their results)."""
    await TrialService.delete_for_project(code, conn=conn)


@router.get("/{code}/results", response_model=List[ResultRead])
async def list_project_results(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[ResultRead]:
    return await ResultService.list_by_project(code, conn=conn)


@router.get("/{code}/results.csv")
async def export_project_results(
    code: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> Response:
    """Download the ``usuario,color,palabra`` CSV of the project's results."""
    content = await ResultService.project_csv(code, conn=conn)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="resultados_{code}.csv"'},
    )
