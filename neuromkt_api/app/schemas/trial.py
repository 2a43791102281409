"""
Pydantic models for tests ("pruebas").

A test is one participant's run within a project.  The participant can
be referenced by code or by email.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class TrialCreate(BaseModel):
    project_code: str = Field(..., examples=["P1"])
    participant_code: Optional[str] = Field(None, examples=["U01"])
    participant_email: Optional[str] = Field(None, examples=["jane@test.com"])

    @model_validator(mode="after")
    def check_participant(self):
        if not (self.participant_code or "").strip() and not (self.participant_email or "").strip():
            raise ValueError("participant_code or participant_email is required")
        return self


class TrialDateUpdate(BaseModel):
    tested_at: Optional[datetime] = Field(None, description="Omit to stamp the current time")


class TrialRead(BaseModel):
    code: str
    project_code: Optional[str] = None
    participant_code: str
    participant_email: Optional[str] = None
    tested_at: Optional[datetime] = None
