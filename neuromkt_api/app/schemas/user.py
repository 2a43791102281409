"""
Pydantic models for application users.

Users are keyed by email.  Passwords are only ever sent *to* the
database, which hashes and verifies them; no response model carries a
password field.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    email: str = Field(..., examples=["ana@neuromkt.com"])
    name: Optional[str] = Field(None, examples=["Ana Pérez"])
    role: str = Field(..., examples=["admin"])
    password: str = Field(..., examples=["strongpassword"])


class UserUpdate(BaseModel):
    """Replacement values for a user.

    Omitted or blank fields keep their current value.
    """

    name: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None
    active: Optional[bool] = None


class UserRead(BaseModel):
    email: str
    name: str = ""
    role: str = ""
    active: Optional[bool] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResult(BaseModel):
    ok: bool
    role: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Optional[str] = None
