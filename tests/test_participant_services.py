import asyncio
from datetime import date

import pytest
from psycopg2 import errors as pg_errors

from neuromkt_api.app.core.errors import ConflictError
from neuromkt_api.app.schemas.participant import ParticipantCreate, ParticipantUpdate
from neuromkt_api.app.services.participant_service import ParticipantService
from neuromkt_api.app.services.trial_service import TrialService


def _row(email="jane@test.com"):
    return {
        "codigo": "U01",
        "email": email,
        "fecha_nacimiento": date(1990, 4, 12),
        "genero": "F",
        "notas": None,
        "creado_por": None,
    }


def test_email_is_normalized_on_write_and_lookup(conn):
    conn.respond([("U01",)], [_row()])
    data = ParticipantCreate(email=" Jane@Test.com ", birth_date=date(1990, 4, 12), gender="F")
    code = asyncio.run(ParticipantService.create_participant(data, conn=conn))
    assert code == "U01"
    assert conn.executed[0][1][0] == "jane@test.com"

    found = asyncio.run(ParticipantService.get_by_email("jane@test.com", conn=conn))
    assert conn.executed[1][1] == ("jane@test.com",)
    assert found.code == "U01"


def test_duplicate_email_is_a_conflict(conn):
    conn.respond(pg_errors.UniqueViolation("duplicate key"))
    with pytest.raises(ConflictError):
        asyncio.run(ParticipantService.create_participant(ParticipantCreate(email="a@b.com"), conn=conn))


def test_blank_email_is_rejected_before_the_database(conn):
    with pytest.raises(ValueError):
        asyncio.run(ParticipantService.create_participant(ParticipantCreate(email="   "), conn=conn))
    assert conn.executed == []


def test_lookup_with_blank_email_is_none(conn):
    assert asyncio.run(ParticipantService.get_by_email("  ", conn=conn)) is None
    assert conn.executed == []


def test_update_participant_tri_state(conn):
    data = ParticipantUpdate.model_validate({"gender": None, "notes": "vegan"})
    asyncio.run(ParticipantService.update_participant("JANE@test.com", data, conn=conn))
    assert conn.last_params == ("jane@test.com", None, "", "vegan")


def test_available_participants_pass_the_fragrance_filter(conn):
    conn.respond([_row()])
    asyncio.run(ParticipantService.list_available("P1", " ", conn=conn))
    assert conn.last_params == ("P1", None)
    asyncio.run(ParticipantService.list_available("P1", "F2", conn=conn))
    assert conn.last_params == ("P1", "F2")


def test_trial_resolves_participant_by_email(conn):
    conn.respond([("PRB3",)])
    code = asyncio.run(TrialService.create_trial("P1", participant_email=" Jane@Test.com", conn=conn))
    assert code == "PRB3"
    assert conn.last_params == (None, "P1", None, "jane@test.com")


def test_trial_needs_a_participant(conn):
    with pytest.raises(ValueError):
        asyncio.run(TrialService.create_trial("P1", conn=conn))


def test_trial_date_update_without_a_code_back_fails(conn):
    conn.respond([(None,)])
    with pytest.raises(ValueError):
        asyncio.run(TrialService.update_trial_date("PRB1", conn=conn))
    assert conn.last_params == ("PRB1", None)
