import asyncio
import csv
import io

from neuromkt_api.app.schemas.result import ResultCreate
from neuromkt_api.app.services.result_service import ResultService
from neuromkt_api.app.services.statistics_service import NO_AGE, NO_GENDER, StatisticsService


def test_create_result_returns_generated_code(conn):
    conn.respond([("R10",)])
    code = asyncio.run(ResultService.create_result(ResultCreate(trial_code="PRB1", hex="#FF0000", word="Fresco"), conn=conn))
    assert code == "R10"
    assert conn.last_params == (None, "PRB1", "#FF0000", "Fresco")


def test_exists_for_trial(conn):
    conn.respond([(True,)], [(False,)])
    assert asyncio.run(ResultService.exists_for_trial("PRB1", conn=conn)) is True
    assert asyncio.run(ResultService.exists_for_trial("PRB2", conn=conn)) is False


def test_project_csv_round_trip(conn):
    conn.respond([("jane@test.com", "#FF0000", "Fresco, limpio"), ("bob@test.com", "#00FF00", 'dice "hola"')])
    text = asyncio.run(ResultService.project_csv("P1", conn=conn))
    rows = list(csv.reader(io.StringIO(text, newline="")))
    assert rows == [
        ["usuario", "color", "palabra"],
        ["jane@test.com", "#FF0000", "Fresco, limpio"],
        ["bob@test.com", "#00FF00", 'dice "hola"'],
    ]


def test_statistics_without_filter_use_the_project_wide_function(conn):
    conn.respond([{"color_hex": "#FF0000", "total": 5}, {"color_hex": "#00FF00", "total": 2}])
    observations = asyncio.run(StatisticsService.colors("P1", conn=conn))
    assert conn.last_params == ("P1",)
    assert "f_estadisticas_colores_proyecto" in conn.last_sql
    assert [(o.kind, o.value, o.count) for o in observations] == [("color", "#FF0000", 5), ("color", "#00FF00", 2)]


def test_statistics_filter_is_passed_through(conn):
    conn.respond([])
    asyncio.run(StatisticsService.words("P1", "F2", conn=conn))
    assert conn.last_params == ("P1", "F2")


def test_store_order_is_kept(conn):
    conn.respond([{"palabra": "b", "total": 1}, {"palabra": "a", "total": 9}])
    observations = asyncio.run(StatisticsService.words("P1", conn=conn))
    assert [o.value for o in observations] == ["b", "a"]


def test_missing_groups_get_a_label(conn):
    conn.respond(
        [{"color_hex": "#FF0000", "genero": None, "total": 1}],
        [{"palabra": "Fresco", "rango_edad": None, "total": 3}],
    )
    by_gender = asyncio.run(StatisticsService.colors_by_gender("P1", conn=conn))
    by_age = asyncio.run(StatisticsService.words_by_age("P1", conn=conn))
    assert by_gender[0].group == NO_GENDER
    assert by_age[0].group == NO_AGE


def test_summary_reads_all_projections_on_one_connection(conn):
    summary = asyncio.run(StatisticsService.summary("P1", " ", conn=conn))
    assert len(conn.executed) == 6
    assert all(params == ("P1",) for _, params in conn.executed)
    assert summary.fragrance_code is None
    assert summary.colors == []
