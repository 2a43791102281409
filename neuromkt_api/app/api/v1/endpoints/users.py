"""
User endpoints for API v1.

``POST /users/login`` checks credentials against the database and, on
success, returns a bearer token carrying the user's email and role.
``GET /users/me`` returns the caller's profile.  Managing users
(listing, creating, updating, deleting) is restricted to
administrators.  Passwords are write-only: they are passed to the
database and never returned.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import get_db
from neuromkt_api.app.core.security import ADMIN_ROLE, create_access_token, get_current_user, require_roles
from neuromkt_api.app.core.fields import normalize_email
from neuromkt_api.app.schemas.user import LoginRequest, Token, UserCreate, UserRead, UserUpdate
from neuromkt_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=Token)
async def login_user(credentials: LoginRequest, conn: PGConnection = Depends(get_db)) -> Token:
    """Authenticate a user and return an access token."""
    result = await UserService.login(credentials.email, credentials.password, conn=conn)
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token({"sub": normalize_email(credentials.email), "role": result.role or ""})
    return Token(access_token=token, role=result.role)


@router.get("/me", response_model=UserRead)
async def read_current_user(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> UserRead:
    profile = await UserService.get_profile(current_user.get("sub"), conn=conn)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


@router.get("/", response_model=List[UserRead])
async def list_users(
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> List[UserRead]:
    return await UserService.list_users(conn=conn)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> UserRead:
    return await UserService.create_user(user_in, conn=conn)


@router.patch("/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    email: str,
    user_in: UserUpdate,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    """Update name, role, active flag or password; omitted fields are kept."""
    await UserService.update_user(email, user_in, conn=conn)


@router.delete("/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    email: str,
    conn: PGConnection = Depends(get_db),
    current_user: dict = Depends(require_roles(ADMIN_ROLE)),
) -> None:
    await UserService.delete_user(email, conn=conn)
