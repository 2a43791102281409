"""
Pydantic models for participants.

Participants are identified by a generated code (``U01``, ``U02``...)
and by a unique email.  Emails are normalized (trimmed, lower-cased)
by the service layer before any write or lookup.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ParticipantCreate(BaseModel):
    email: str = Field(..., examples=["jane@test.com"])
    birth_date: Optional[date] = Field(None, examples=["1990-04-12"])
    gender: Optional[str] = Field(None, examples=["F"])
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, description="Creator email; defaults to the caller")


class ParticipantUpdate(BaseModel):
    """Partial update.

    Omitted fields are left untouched.  A blank ``gender`` or ``notes``
    clears the stored value.  ``birth_date`` can be replaced but not
    cleared.
    """

    birth_date: Optional[date] = None
    gender: Optional[str] = None
    notes: Optional[str] = None


class ParticipantRead(BaseModel):
    code: str
    email: str
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
