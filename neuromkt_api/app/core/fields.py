"""
Input normalization helpers shared by the services.

The ``neuromkt.u_*`` stored functions read their optional arguments
with a three-way convention: ``NULL`` leaves the column untouched, an
empty string clears it (``nullif(p, '')``) and any other value
overwrites it.  ``FieldUpdate`` makes that convention explicit so a
caller that did not send a field can never wipe it by accident.

Natural keys are normalized here too: emails are trimmed and
lower-cased before every write and every lookup, and optional codes or
filters collapse to ``None`` when blank.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class UpdateKind(str, Enum):
    UNCHANGED = "unchanged"
    CLEARED = "cleared"
    SET = "set"


@dataclass(frozen=True)
class FieldUpdate:
    """A single optional field of a partial update."""

    kind: UpdateKind
    value: Any = None

    @classmethod
    def unchanged(cls) -> "FieldUpdate":
        return cls(UpdateKind.UNCHANGED)

    @classmethod
    def cleared(cls) -> "FieldUpdate":
        return cls(UpdateKind.CLEARED)

    @classmethod
    def set(cls, value: Any) -> "FieldUpdate":
        if value is None:
            raise ValueError("FieldUpdate.set requires a value; use cleared() instead")
        return cls(UpdateKind.SET, value)

    @classmethod
    def from_input(cls, value: Any, provided: bool = True, clearable: bool = True) -> "FieldUpdate":
        """Classify a raw input value.

        * not provided -> unchanged
        * ``None`` or a blank string -> cleared, or unchanged when the
          column cannot be cleared (required columns, dates, flags)
        * anything else -> set (strings are trimmed)
        """
        if not provided:
            return cls.unchanged()
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.cleared() if clearable else cls.unchanged()
        if isinstance(value, str):
            value = value.strip()
        return cls.set(value)

    @classmethod
    def of_model(cls, model: BaseModel, name: str, clearable: bool = True) -> "FieldUpdate":
        """Classify ``model.<name>`` using the set of fields the client sent."""
        return cls.from_input(
            getattr(model, name),
            provided=name in model.model_fields_set,
            clearable=clearable,
        )

    @property
    def is_unchanged(self) -> bool:
        return self.kind is UpdateKind.UNCHANGED

    def to_param(self) -> Any:
        """Encode for a ``u_*`` stored function argument."""
        if self.kind is UpdateKind.UNCHANGED:
            return None
        if self.kind is UpdateKind.CLEARED:
            return ""
        return self.value


def normalize_email(value: Optional[str]) -> str:
    """Trim and lower-case an email address; ``None`` becomes ``""``."""
    return (value or "").strip().lower()


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Trimmed text, or ``None`` for missing and whitespace-only input.

    Used for "generate a code for me" markers and optional filters,
    which the store expects as ``NULL`` rather than ``''``.
    """
    if value is None:
        return None
    value = str(value).strip()
    return value or None
