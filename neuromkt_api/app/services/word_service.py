"""
Service layer for the shared word catalog.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from psycopg2.extensions import connection as PGConnection

from neuromkt_api.app.core.db import connection_scope, dict_cursor, run_in_thread
from neuromkt_api.app.core.errors import conflict_on_duplicate, require_text
from neuromkt_api.app.schemas.catalog import WordRead

logger = logging.getLogger(__name__)


class WordService:
    """CRUD operations for the word catalog (``neuromkt.palabras``)."""

    @classmethod
    @run_in_thread
    def list_words(cls, conn: Optional[PGConnection] = None) -> List[WordRead]:
        with connection_scope(conn) as db, dict_cursor(db) as cursor:
            cursor.execute("SELECT * FROM neuromkt.l_palabras()")
            rows = cursor.fetchall()
        return [WordRead(word=row["palabra"]) for row in rows]

    @classmethod
    @run_in_thread
    def create_word(cls, word: str, conn: Optional[PGConnection] = None) -> WordRead:
        word = require_text(word, "word")
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("word", word):
                cursor.execute("SELECT neuromkt.i_palabra(CAST(%s AS varchar))", (word,))
        logger.info("Created word %s", word)
        return WordRead(word=word)

    @classmethod
    @run_in_thread
    def update_word(cls, original: str, new: str, conn: Optional[PGConnection] = None) -> WordRead:
        """Rename a word; both the current and the new value are required."""
        original = require_text(original, "word")
        new = require_text(new, "new word")
        with connection_scope(conn) as db, db.cursor() as cursor:
            with conflict_on_duplicate("word", new):
                cursor.execute(
                    "SELECT neuromkt.u_palabra(CAST(%s AS varchar), CAST(%s AS varchar))",
                    (original, new),
                )
        logger.info("Renamed word %s -> %s", original, new)
        return WordRead(word=new)

    @classmethod
    @run_in_thread
    def delete_word(cls, word: str, conn: Optional[PGConnection] = None) -> None:
        word = require_text(word, "word")
        with connection_scope(conn) as db, db.cursor() as cursor:
            cursor.execute("SELECT neuromkt.d_palabra(CAST(%s AS varchar))", (word,))
        logger.info("Deleted word %s", word)
