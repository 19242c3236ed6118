# tests/test_transport.py

from __future__ import annotations

import pytest
import requests

from ratboard.client import ApiUnavailable, HttpApi

ALLOWED = "http://127.0.0.1:5500"


def test_allowed_origin_gets_cors_headers(client) -> None:
    resp = client.get("/api/tasks?username=alice", headers={"Origin": ALLOWED})
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == ALLOWED


def test_preflight_for_patch(client) -> None:
    resp = client.options(
        "/api/tasks/1",
        headers={
            "Origin": "http://localhost:5500",
            "Access-Control-Request-Method": "PATCH",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5500"
    assert "PATCH" in resp.headers["Access-Control-Allow-Methods"]


@pytest.mark.parametrize("method", ["get", "post", "options"])
def test_foreign_origin_is_rejected(client, method) -> None:
    resp = getattr(client, method)(
        "/api/tasks?username=alice",
        headers={"Origin": "http://evil.example"},
        json={"username": "alice", "title": "x", "description": ""} if method == "post" else None,
    )
    assert resp.status_code == 403
    assert resp.get_json() == {"message": "Not allowed by CORS"}


def test_same_origin_page_requests_pass(client) -> None:
    resp = client.post(
        "/api/login",
        json={"username": "alice", "password": "wonderland"},
        headers={"Origin": "http://localhost"},
    )
    assert resp.status_code == 200


def test_requests_without_origin_pass(client) -> None:
    assert client.get("/api/tasks?username=alice").status_code == 200


def test_hardening_headers_without_csp(client) -> None:
    resp = client.get("/")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert resp.headers["Referrer-Policy"] == "no-referrer"
    assert "Content-Security-Policy" not in resp.headers


class _Resp:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class _Session:
    def __init__(self, outcome):
        self.outcome = outcome
        self.seen = []

    def request(self, method, url, json=None, params=None):
        self.seen.append((method, url, json, params))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def test_http_api_returns_status_and_body() -> None:
    session = _Session(_Resp(401, {"message": "Invalid credentials"}))
    api = HttpApi("http://board.test/", session=session)
    assert api.request("POST", "/api/login", json={"username": "a"}) == (401, {"message": "Invalid credentials"})
    assert session.seen == [("POST", "http://board.test/api/login", {"username": "a"}, None)]


def test_http_api_tolerates_non_json_bodies() -> None:
    api = HttpApi(session=_Session(_Resp(502, ValueError("no json"))))
    assert api.request("GET", "/api/tasks", params={"username": "alice"}) == (502, {})


def test_http_api_wraps_transport_errors() -> None:
    api = HttpApi(session=_Session(requests.ConnectionError("refused")))
    with pytest.raises(ApiUnavailable):
        api.request("GET", "/api/tasks")
