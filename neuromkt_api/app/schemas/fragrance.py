"""
Pydantic models for fragrances.

A fragrance belongs to the user who created it.  Its ``code`` is
generated by ``neuromkt.i_fragancia`` unless the client supplies one.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FragranceCreate(BaseModel):
    code: Optional[str] = Field(None, description="Leave empty to let the database generate it")
    name: str = Field(..., examples=["Citrus Bloom"])
    provider: Optional[str] = Field(None, examples=["Aromas SA"])
    description: Optional[str] = None
    created_by: Optional[str] = Field(None, description="Creator email; defaults to the caller")


class FragranceUpdate(BaseModel):
    """Partial update.

    Omitted fields are left untouched.  A blank ``provider`` or
    ``description`` clears the stored value; ``name`` cannot be cleared.
    """

    name: Optional[str] = None
    provider: Optional[str] = None
    description: Optional[str] = None


class FragranceRead(BaseModel):
    code: str
    name: str
    provider: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
