"""
CSV export.

Rows are serialized from an explicit list of columns (header plus the
attribute or key to read), never by reflecting over an object.  Quoting
follows RFC 4180: a field is quoted when it contains the delimiter, a
double quote or a line break, and embedded quotes are doubled.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class Column:
    """One CSV column: ``header`` text and where to read the value from.

    ``source`` is an attribute/key name or a callable taking the row.
    It defaults to the header.
    """

    header: str
    source: Optional[Union[str, Callable[[Any], Any]]] = None

    def read(self, row: Any) -> Any:
        source = self.source if self.source is not None else self.header
        if callable(source):
            return source(row)
        if isinstance(row, Mapping):
            return row.get(source)
        return getattr(row, source, None)


class ExportService:
    """Render records as CSV text."""

    @staticmethod
    def to_csv(rows: Iterable[Any], columns: Sequence[Column], delimiter: str = ";") -> str:
        """Return the CSV document for ``rows``.

        The header row is always written.  ``None`` becomes an empty
        field; other values are converted with ``str``.  Lines end with
        CRLF.
        """
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            delimiter=delimiter,
            quotechar='"',
            doublequote=True,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator="\r\n",
        )
        writer.writerow([column.header for column in columns])
        for row in rows:
            writer.writerow(["" if (value := column.read(row)) is None else str(value) for column in columns])
        return buffer.getvalue()
