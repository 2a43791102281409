import pytest
from fastapi import HTTPException

from neuromkt_api.app.core.security import create_access_token, decode_access_token, require_roles


def test_token_round_trip():
    token = create_access_token({"sub": "ana@neuromkt.com", "role": "admin"})
    claims = decode_access_token(token)
    assert claims["sub"] == "ana@neuromkt.com"
    assert claims["role"] == "admin"


def test_tampered_token_is_rejected():
    token = create_access_token({"sub": "ana@neuromkt.com", "role": "usuario"})
    header, payload, signature = token.split(".")
    forged = create_access_token({"sub": "ana@neuromkt.com", "role": "admin"}).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None
    assert decode_access_token("not-a-token") is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "ana@neuromkt.com"}, expires_delta=-10)
    assert decode_access_token(token) is None


def test_require_roles_is_case_insensitive():
    dependency = require_roles("admin")
    assert dependency({"sub": "a", "role": "ADMIN"})["sub"] == "a"
    with pytest.raises(HTTPException) as info:
        dependency({"sub": "b", "role": "usuario"})
    assert info.value.status_code == 403
