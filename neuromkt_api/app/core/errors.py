"""
Application error types.

Local validation failures raise plain ``ValueError`` and store errors
propagate as ``psycopg2.Error``.  The only translated case is a unique
violation raised while inserting a caller-supplied identifier, which
becomes a ``ConflictError`` so the API can answer with HTTP 409.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from psycopg2 import errors as pg_errors

logger = logging.getLogger(__name__)


class ConflictError(ValueError):
    """An identifier or natural key supplied by the caller already exists."""

    def __init__(self, entity: str, key: Optional[str] = None, detail: Optional[str] = None):
        self.entity = entity
        self.key = key
        message = f"{entity} {key!r} already exists" if key else f"{entity} already exists"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def store_message(exc: Exception) -> str:
    """Primary message reported by PostgreSQL, or ``str(exc)``."""
    diag = getattr(exc, "diag", None)
    primary = getattr(diag, "message_primary", None)
    return primary or str(exc).strip()


def require_text(value: Optional[str], field: str) -> str:
    """Return ``value`` trimmed or raise ``ValueError`` when it is blank."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field} must not be empty")
    return str(value).strip()


@contextmanager
def conflict_on_duplicate(entity: str, key: Optional[str] = None) -> Iterator[None]:
    """Translate a unique violation on a caller-supplied ``key`` into ``ConflictError``.

    Without a key the database generated the identifier, so a unique
    violation is a store error and propagates unchanged.
    """
    if not key:
        yield
        return
    try:
        yield
    except pg_errors.UniqueViolation as exc:
        detail = store_message(exc)
        logger.warning("Duplicate %s %s: %s", entity, key, detail)
        raise ConflictError(entity, key, detail) from exc
