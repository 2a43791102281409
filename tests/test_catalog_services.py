import asyncio

import pytest
from psycopg2 import errors as pg_errors

from neuromkt_api.app.core.errors import ConflictError
from neuromkt_api.app.schemas.catalog import ColorCreate, ColorUpdate
from neuromkt_api.app.services.color_service import ColorService
from neuromkt_api.app.services.word_service import WordService


def test_create_color_defaults_the_name(conn):
    color = asyncio.run(ColorService.create_color(ColorCreate(hex=" #FF00AA "), conn=conn))
    assert color.name == "Color #FF00AA"
    assert conn.last_params == ("#FF00AA", "Color #FF00AA")
    assert "neuromkt.i_color" in conn.last_sql


def test_create_color_duplicate_is_a_conflict(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key value"))
    with pytest.raises(ConflictError):
        asyncio.run(ColorService.create_color(ColorCreate(hex="#000000", name="Negro"), conn=conn))


def test_update_color_sends_blank_values_as_null(conn):
    asyncio.run(ColorService.update_color("#000000", ColorUpdate(hex="", name="Negro"), conn=conn))
    assert conn.last_params == ("#000000", None, "Negro")


def test_list_colors_maps_missing_names(conn):
    conn.respond([{"hex": "#FFFFFF", "nombre": None}])
    colors = asyncio.run(ColorService.list_colors(conn=conn))
    assert [(c.hex, c.name) for c in colors] == [("#FFFFFF", "")]


def test_rename_word_requires_both_values(conn):
    with pytest.raises(ValueError):
        asyncio.run(WordService.update_word("Fresco", "  ", conn=conn))
    assert conn.executed == []


def test_rename_word(conn):
    word = asyncio.run(WordService.update_word(" Fresco ", "Fresca", conn=conn))
    assert word.word == "Fresca"
    assert conn.last_params == ("Fresco", "Fresca")


def test_renaming_only_the_color_name_does_not_report_a_conflict(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"))
    with pytest.raises(pg_errors.UniqueViolation):
        asyncio.run(ColorService.update_color("#000000", ColorUpdate(name="Negro"), conn=conn))


def test_new_hex_collision_is_a_conflict(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"))
    with pytest.raises(ConflictError):
        asyncio.run(ColorService.update_color("#000000", ColorUpdate(hex="#FFFFFF"), conn=conn))
