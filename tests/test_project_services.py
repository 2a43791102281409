import asyncio

import psycopg2
import pytest
from psycopg2 import errors as pg_errors

from neuromkt_api.app.core.errors import ConflictError
from neuromkt_api.app.schemas.fragrance import FragranceCreate, FragranceUpdate
from neuromkt_api.app.schemas.project import ProjectCreate, ProjectUpdate
from neuromkt_api.app.services.fragrance_service import FragranceService
from neuromkt_api.app.services.project_items_service import (
    ProjectColorService,
    ProjectFragranceService,
)
from neuromkt_api.app.services.project_service import ProjectService


def test_blank_project_code_requests_generation(conn):
    conn.respond([("P12",)])
    data = ProjectCreate(code="  ", name="Verano", provider="Aromas SA", created_by=" Ana@Neuromkt.com ")
    code = asyncio.run(ProjectService.create_project(data, conn=conn))
    assert code == "P12"
    assert conn.last_params == (None, "Verano", "Aromas SA", None, "ana@neuromkt.com")


def test_manual_project_code_collision_is_a_conflict(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"))
    data = ProjectCreate(code="P1", name="Verano", provider="Aromas SA")
    with pytest.raises(ConflictError) as info:
        asyncio.run(ProjectService.create_project(data, conn=conn))
    assert info.value.key == "P1"


def test_create_project_without_returned_code_fails(conn):
    conn.respond([(None,)])
    with pytest.raises(ValueError):
        asyncio.run(ProjectService.create_project(ProjectCreate(name="X", provider="Y"), conn=conn))


def test_project_update_tri_state(conn):
    data = ProjectUpdate.model_validate({"name": "Nuevo", "description": ""})
    code = asyncio.run(ProjectService.update_project("P1", data, conn=conn))
    assert code == "P1"
    # name set, provider untouched, description cleared
    assert conn.last_params == ("P1", "Nuevo", None, "")


def test_project_update_cannot_clear_the_name(conn):
    data = ProjectUpdate.model_validate({"name": None, "provider": None})
    asyncio.run(ProjectService.update_project("P1", data, conn=conn))
    assert conn.last_params == ("P1", None, "", None)


def test_delete_project_reports_missing_rows(conn):
    conn.respond(0, 1)
    assert asyncio.run(ProjectService.delete_project("P404", conn=conn)) is False
    assert asyncio.run(ProjectService.delete_project("P1", conn=conn)) is True


def test_get_project_absent_is_none(conn):
    conn.respond([])
    assert asyncio.run(ProjectService.get_project("P9", conn=conn)) is None


def test_project_summaries(conn):
    conn.respond([{"codigo": "P1", "nombre": "Verano", "num_participantes": 4}])
    summaries = asyncio.run(ProjectService.list_project_summaries(conn=conn))
    assert summaries[0].participant_count == 4


def test_fragrance_update_keeps_omitted_fields(conn):
    data = FragranceUpdate.model_validate({"provider": "  "})
    asyncio.run(FragranceService.update_fragrance("F1", data, conn=conn))
    assert conn.last_params == ("F1", None, "", None)


def test_fragrance_list_filter_is_normalized(conn):
    conn.respond([{"codigo": "F1", "nombre": "Citrus", "proveedor": None, "descripcion": None, "creado_por": "ana@x.com"}])
    fragrances = asyncio.run(FragranceService.list_fragrances(created_by=" ANA@x.com", conn=conn))
    assert conn.last_params == ("ana@x.com",)
    assert fragrances[0].created_by == "ana@x.com"


def test_create_fragrance_returns_generated_code(conn):
    conn.respond([("F3",)])
    code = asyncio.run(FragranceService.create_fragrance(FragranceCreate(name="Citrus"), conn=conn))
    assert code == "F3"
    assert conn.last_params[0] is None


def test_project_color_link_uses_generated_code(conn):
    conn.respond([("PC5",)])
    code = asyncio.run(ProjectColorService.add_color("P1", "#FF0000", conn=conn))
    assert code == "PC5"
    assert conn.last_params == ("P1", "#FF0000", None)


def test_project_fragrances_are_read_with_names(conn):
    conn.respond([{"codigo": "PF1", "fragancia_codigo": "F1", "nombre": "Citrus"}])
    links = asyncio.run(ProjectFragranceService.list_fragrances("P1", conn=conn))
    assert links[0].fragrance_name == "Citrus"
    assert links[0].project_code == "P1"


def test_collision_on_a_generated_project_code_is_a_store_error(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key value violates unique constraint proyectos_pkey"))
    with pytest.raises(psycopg2.Error) as info:
        asyncio.run(ProjectService.create_project(ProjectCreate(code=" ", name="X", provider="Y"), conn=conn))
    assert not isinstance(info.value, ConflictError)


def test_collision_on_a_generated_fragrance_code_is_a_store_error(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"))
    with pytest.raises(pg_errors.UniqueViolation):
        asyncio.run(FragranceService.create_fragrance(FragranceCreate(name="Citrus"), conn=conn))


def test_link_collisions_are_store_errors(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"), pg_errors.UniqueViolation("duplicate key"))
    with pytest.raises(pg_errors.UniqueViolation):
        asyncio.run(ProjectColorService.add_color("P1", "#FF0000", conn=conn))
    with pytest.raises(pg_errors.UniqueViolation):
        asyncio.run(ProjectFragranceService.add_fragrance("P1", "F1", conn=conn))
