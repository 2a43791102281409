"""
Pydantic models for projects and their associated catalog items.

A project groups the colors, words and fragrances offered to
participants during a study.  The association rows (project-color,
project-word, project-fragrance) carry their own generated codes
(``PC<n>``, ``PP<n>``, ``PF<n>``).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    code: Optional[str] = Field(None, description="Leave empty to let the database generate it")
    name: str = Field(..., examples=["Verano 2025"])
    provider: str = Field(..., examples=["Aromas SA"])
    description: Optional[str] = None
    created_by: Optional[str] = Field(None, description="Creator email; defaults to the caller")


class ProjectUpdate(BaseModel):
    """Partial update.

    Omitted fields are left untouched; a blank ``provider`` or
    ``description`` clears it; ``name`` cannot be cleared.
    """

    name: Optional[str] = None
    provider: Optional[str] = None
    description: Optional[str] = None


class ProjectRead(BaseModel):
    code: str
    name: str
    provider: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class ProjectSummary(BaseModel):
    code: str
    name: str
    participant_count: int = 0


class ProjectColorCreate(BaseModel):
    hex: str = Field(..., examples=["#FF00AA"])


class ProjectColorRead(BaseModel):
    code: str
    project_code: str
    hex: str


class ProjectWordCreate(BaseModel):
    word: str = Field(..., examples=["Fresco"])


class ProjectWordRead(BaseModel):
    code: str
    project_code: str
    word: str


class ProjectFragranceCreate(BaseModel):
    fragrance_code: str = Field(..., examples=["F1"])


class ProjectFragranceRead(BaseModel):
    code: str
    project_code: str
    fragrance_code: str
    fragrance_name: Optional[str] = None


class CodeRead(BaseModel):
    """Identifier returned by an insert-style stored function."""

    code: str
