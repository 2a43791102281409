import asyncio

from psycopg2 import errors as pg_errors

from neuromkt_api.app.schemas.user import UserCreate, UserUpdate
from neuromkt_api.app.services.user_service import UserService


def test_login_with_unknown_email_fails_without_role(conn):
    conn.respond([])
    result = asyncio.run(UserService.login("nobody@test.com", "secret", conn=conn))
    assert result.ok is False
    assert result.role is None


def test_login_no_data_found_is_a_failed_login(conn):
    conn.respond(pg_errors.NoDataFound("usuario no encontrado"))
    result = asyncio.run(UserService.login("nobody@test.com", "secret", conn=conn))
    assert result.ok is False


def test_login_success_reports_role(conn):
    conn.respond([{"ok": True, "rol": "admin"}])
    result = asyncio.run(UserService.login(" Ana@Neuromkt.com ", "secret", conn=conn))
    assert result.ok is True
    assert result.role == "admin"
    assert conn.last_params == ("ana@neuromkt.com", "secret")


def test_blank_credentials_never_reach_the_database(conn):
    result = asyncio.run(UserService.login("ana@neuromkt.com", "", conn=conn))
    assert result.ok is False
    assert conn.executed == []


def test_profile_never_selects_the_password(conn):
    conn.respond([{"email": "ana@neuromkt.com", "nombre": "Ana", "rol": "admin", "activo": True}])
    profile = asyncio.run(UserService.get_profile("ANA@neuromkt.com", conn=conn))
    assert "password" not in conn.last_sql
    assert "password" not in profile.model_dump()
    assert profile.role == "admin"


def test_create_user_normalizes_email(conn):
    user = asyncio.run(
        UserService.create_user(UserCreate(email=" Ana@X.com", name="Ana", role="admin", password="pw"), conn=conn)
    )
    assert user.email == "ana@x.com"
    assert conn.last_params == ("ana@x.com", "Ana", "admin", "pw")


def test_update_user_keeps_blank_fields(conn):
    asyncio.run(UserService.update_user("ana@x.com", UserUpdate(name=" ", active=False), conn=conn))
    assert conn.last_params == ("ana@x.com", None, None, False, None)
