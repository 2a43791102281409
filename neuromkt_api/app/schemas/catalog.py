"""
Pydantic models for the shared catalogs: colors and words.

Colors are keyed by their ``hex`` value and words by the word itself;
both are natural keys shared across every project.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ColorCreate(BaseModel):
    hex: str = Field(..., examples=["#FF00AA"])
    name: Optional[str] = Field(None, examples=["Fucsia"], description="Defaults to 'Color <hex>' when blank")


class ColorUpdate(BaseModel):
    """Replacement values for a color; blank values keep the current ones."""

    hex: Optional[str] = Field(None, examples=["#FF00AB"])
    name: Optional[str] = None


class ColorRead(BaseModel):
    hex: str
    name: str = ""


class WordCreate(BaseModel):
    word: str = Field(..., examples=["Fresco"])


class WordUpdate(BaseModel):
    word: str = Field(..., examples=["Fresca"])


class WordRead(BaseModel):
    word: str
