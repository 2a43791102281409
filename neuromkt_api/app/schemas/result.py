"""
Pydantic models for results and aggregated statistics.

A result is one (color, word) pick recorded for a test.  Statistics are
returned as uniform ``Observation`` records: ``kind`` is ``"color"`` or
``"palabra"``, ``group`` is the gender or age bracket label (``None``
for project-wide counts), ``value`` is the color hex or the word and
``count`` the number of picks.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ResultCreate(BaseModel):
    trial_code: str = Field(..., examples=["PRB1"])
    hex: str = Field(..., examples=["#FF00AA"])
    word: str = Field(..., examples=["Fresco"])


class ResultRead(BaseModel):
    code: str
    trial_code: str
    hex: str
    word: str
    participant_email: Optional[str] = None


class Observation(BaseModel):
    kind: str
    group: Optional[str] = None
    value: str
    count: int


class StatisticsSummary(BaseModel):
    project_code: str
    fragrance_code: Optional[str] = None
    colors: List[Observation] = []
    words: List[Observation] = []
    colors_by_gender: List[Observation] = []
    colors_by_age: List[Observation] = []
    words_by_gender: List[Observation] = []
    words_by_age: List[Observation] = []
