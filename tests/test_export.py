import csv
import io
from types import SimpleNamespace

import pytest

from neuromkt_api.app.services.export_service import Column, ExportService


def _parse(text, delimiter=";"):
    return list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))


def test_header_is_written_for_empty_input():
    text = ExportService.to_csv([], [Column("a"), Column("b")])
    assert text == "a;b\r\n"


def test_special_characters_survive_csv_reader():
    rows = [
        {"name": 'Rosa "vieja"', "notes": "line1\nline2"},
        {"name": "a;b", "notes": None},
    ]
    columns = [Column("name"), Column("notes")]
    parsed = _parse(ExportService.to_csv(rows, columns))
    assert parsed == [
        ["name", "notes"],
        ['Rosa "vieja"', "line1\nline2"],
        ["a;b", ""],
    ]


def test_columns_read_attributes_keys_and_callables():
    rows = [SimpleNamespace(code="P1", count=3)]
    columns = [Column("codigo", "code"), Column("doble", lambda row: row.count * 2)]
    assert _parse(ExportService.to_csv(rows, columns)) == [["codigo", "doble"], ["P1", "6"]]


def test_delimiter_must_be_one_character():
    with pytest.raises(ValueError):
        ExportService.to_csv([], [Column("a")], delimiter=";;")
