# tests/test_login.py

from __future__ import annotations

import pytest

from ratboard import db


def test_safe_login_returns_role_and_username_token(client) -> None:
    resp = client.post("/api/login", json={"username": "alice", "password": "wonderland"})
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Welcome alice", "role": "admin", "token": "alice"}


def test_safe_login_wrong_password(client) -> None:
    resp = client.post("/api/login", json={"username": "bob", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid credentials"


@pytest.mark.parametrize("password", ["' OR '1'='1", "wonderland' --", "x' OR 1=1 --"])
def test_safe_login_ignores_quotes_in_password(client, password) -> None:
    resp = client.post("/api/login", json={"username": "alice", "password": password})
    assert resp.status_code == 401


def test_safe_login_binds_quotes_literally(client, app) -> None:
    with app.app_context():
        conn = db.get_db()
        conn.execute("INSERT INTO users (username, password, role) VALUES ('quoted', 'it''s', 'user')")
        conn.commit()

    resp = client.post("/api/login", json={"username": "quoted", "password": "it's"})
    assert resp.status_code == 200
    assert resp.get_json()["token"] == "quoted"


@pytest.mark.parametrize(
    "username",
    ["ab", "a" * 33, "alice!", "al ice", "alice' --", "alice\n", "", 12345, None],
)
def test_safe_login_rejects_bad_usernames_before_querying(client, monkeypatch, username) -> None:
    def boom(*args, **kwargs):
        raise AssertionError("store must not be queried")

    monkeypatch.setattr(db, "find_user", boom)
    resp = client.post("/api/login", json={"username": username, "password": "wonderland"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid input"


def test_safe_login_rejects_short_password_and_missing_body(client) -> None:
    assert client.post("/api/login", json={"username": "alice", "password": "ab"}).status_code == 400
    assert client.post("/api/login", data="not json").status_code == 400


def test_vulnerable_login_with_real_credentials(client) -> None:
    resp = client.post("/api/login-vulnerable", json={"username": "bob", "password": "builder"})
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged in as bob (user)", "token": "bob"}


def test_vulnerable_login_always_true_password_bypasses_auth(client) -> None:
    resp = client.post(
        "/api/login-vulnerable",
        json={"username": "nobody", "password": "' OR '1'='1"},
    )
    assert resp.status_code == 200
    # First row wins: the admin seeded first.
    assert resp.get_json()["token"] == "alice"
    assert "(admin)" in resp.get_json()["message"]


def test_vulnerable_login_comment_out_password_check(client) -> None:
    resp = client.post(
        "/api/login-vulnerable",
        json={"username": "charlie' --", "password": "whatever"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["token"] == "charlie"


def test_vulnerable_login_surfaces_raw_query_error(client) -> None:
    resp = client.post("/api/login-vulnerable", json={"username": "alice", "password": "'"})
    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Query error: ")


def test_vulnerable_login_refuses_stacked_statements(client) -> None:
    resp = client.post(
        "/api/login-vulnerable",
        json={"username": "alice", "password": "'; DROP TABLE users; --"},
    )
    assert resp.status_code == 400

    still_there = client.post("/api/login", json={"username": "alice", "password": "wonderland"})
    assert still_there.status_code == 200


def test_vulnerable_login_wrong_password_and_empty_body(client) -> None:
    assert client.post("/api/login-vulnerable", json={"username": "bob", "password": "x"}).status_code == 401
    assert client.post("/api/login-vulnerable", json={}).status_code == 401
    assert client.post("/api/login-vulnerable", data="garbage").status_code == 401
