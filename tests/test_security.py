import pytest

from config.settings import settings
from utils.security import create_admin_token, hash_password, verify_admin_token, verify_password


def test_password_hash_roundtrip():
    hashed = hash_password("ns841414")
    assert hashed != "ns841414"
    assert verify_password("ns841414", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("x", "not-a-hash") is False


def test_admin_token():
    token = create_admin_token(5, ttl_minutes=10, now=1_000)
    assert verify_admin_token(token, now=1_000) == 5
    # 만료
    assert verify_admin_token(token, now=1_000 + 11 * 60) is None


@pytest.mark.parametrize("token", ["", "abc", "5.99999999999.deadbeef", "x.y.z"])
def test_admin_token_rejects_malformed_or_forged(token):
    assert verify_admin_token(token) is None


def test_admin_token_tampered_id():
    token = create_admin_token(5)
    _, expires, signature = token.split(".")
    assert verify_admin_token(f"6.{expires}.{signature}") is None


def test_admin_token_depends_on_secret(monkeypatch):
    token = create_admin_token(1)
    monkeypatch.setattr(settings, "SECRET_KEY", "rotated")
    assert verify_admin_token(token) is None


# ==========================================================
# 관리자 토큰이 필요한 모드 (ADMIN_AUTH_REQUIRED=true)
# ==========================================================

def _login(client, db):
    from schemas.admins import AdminCreate
    from services import storage

    storage.create_admin(db, AdminCreate(email="head@school.local", password="s3cret", name="Head"))
    res = client.post("/api/admin/login", json={"email": "head@school.local", "password": "s3cret"})
    return res.json()["token"]


def test_mutation_requires_token(client, admin_auth):
    res = client.post("/api/sessions", json={"name": "2025-26", "isActive": True})
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert client.get("/api/sessions").json() == []


def test_mutation_with_token(client, db, admin_auth):
    token = _login(client, db)
    res = client.post(
        "/api/sessions",
        json={"name": "2025-26", "isActive": True},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 201


@pytest.mark.parametrize("header", ["Bearer nope", "Basic abc", "token-without-scheme"])
def test_mutation_with_bad_header(client, db, admin_auth, header):
    _login(client, db)
    res = client.post("/api/sessions", json={"name": "2025-26"}, headers={"Authorization": header})
    assert res.status_code == 401


def test_reads_stay_public(client, admin_auth):
    assert client.get("/api/students").status_code == 200
    assert client.get("/api/sessions/active").status_code == 200
