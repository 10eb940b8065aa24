from __future__ import annotations

import inspect

import pytest
from fastapi.testclient import TestClient

from fitness_app.web.api import create_app


@pytest.fixture
def app(services, clock):
    return create_app(services, session_ttl_seconds=3600, clock=clock.time)


@pytest.fixture
def client(app):
    return TestClient(app)


def _login(client, email="ada@example.com", password="pw-admin"):
    r = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200
    return r.json()


def _auth(body):
    return {"Authorization": f"Bearer {body['token']}"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_login_and_session(client):
    body = _login(client)
    assert body["authenticated"] is True
    assert body["identity"] == "1"
    assert body["role"] == "admin"
    assert body["streak"] == 1
    assert body["token"]

    assert client.get("/v1/auth/session", headers=_auth(body)).json()["authenticated"] is True
    assert client.get("/v1/auth/session").json()["authenticated"] is False

    out = client.post("/v1/auth/logout", headers=_auth(body)).json()
    assert out["authenticated"] is False
    assert client.get("/v1/auth/session", headers=_auth(body)).json()["authenticated"] is False


def test_web_login_does_not_replace_process_session(client, services):
    services.guard.login("sam@example.com", "pw-sam")
    _login(client)
    assert services.guard.session.identity == "42"
    assert services.guard.is_admin is False


def test_bad_credentials_is_401(client):
    r = client.post("/v1/auth/login", json={"email": "ada@example.com", "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"detail": "Invalid email or password.", "code": "invalid_credentials"}


def test_suspended_login_is_distinct_403(client, services):
    services.suspensions.suspend(42, "policy violation")
    r = client.post("/v1/auth/login", json={"email": "sam@example.com", "password": "pw-sam"})
    assert r.status_code == 403
    assert r.json()["code"] == "account_suspended"
    assert "policy violation" in r.json()["detail"]


def test_admin_routes_require_admin(client):
    assert client.get("/v1/admin/users").status_code == 403
    member = _login(client, "sam@example.com", "pw-sam")
    r = client.post("/v1/admin/users/7/suspend", json={}, headers=_auth(member))
    assert r.status_code == 403
    assert r.json()["code"] == "permission_denied"


def test_other_callers_do_not_inherit_admin_login(app, services):
    admin = TestClient(app)
    body = _login(admin)
    assert admin.get("/v1/admin/users", headers=_auth(body)).status_code == 200

    stranger = TestClient(app)
    assert stranger.get("/v1/admin/users").status_code == 403
    assert stranger.post("/v1/admin/users/7/delete").status_code == 403
    bogus = {"Authorization": "Bearer not-a-real-token"}
    assert stranger.post("/v1/admin/users/7/suspend", json={}, headers=bogus).status_code == 403
    assert services.deletions.is_deleted(7) is False
    assert services.suspensions.is_suspended(7) is False


def test_web_session_expires(client, clock):
    body = _login(client)
    clock.advance(3600)
    assert client.get("/v1/admin/users", headers=_auth(body)).status_code == 403


def test_refused_login_does_not_break_admin_remote_calls(client, services, directory):
    body = _login(client)
    services.suspensions.suspend(42)
    assert client.post("/v1/auth/login", json={"email": "sam@example.com", "password": "pw-sam"}).status_code == 403

    assert client.get("/v1/admin/users", headers=_auth(body)).status_code == 200
    assert directory.scoped_tokens[-1] == "tok-admin"


def test_admin_suspend_delete_and_activity(client, clock):
    h = _auth(_login(client))

    r = client.post("/v1/admin/users/42/suspend", json={"reason": "spam"}, headers=h)
    assert r.status_code == 200
    assert r.json()["is_suspended"] is True

    clock.advance(30)
    status = client.get("/v1/admin/users/42/suspension", headers=h).json()
    assert "23 hours and 59 minutes" in status["message"]

    assert client.post("/v1/admin/users/7/delete", headers=h).json() == {"deleted": ["7"]}
    users = client.get("/v1/admin/users", headers=h).json()
    assert {u["userId"]: u["status"] for u in users} == {1: "active", 42: "suspended"}

    assert client.delete("/v1/admin/users/42/suspend", headers=h).json()["is_suspended"] is False
    events = client.get("/v1/admin/users/42/activity", headers=h).json()["events"]
    assert [e["type"] for e in events] == ["account_reactivated", "account_suspended"]


def test_bulk_delete_and_validation(client):
    h = _auth(_login(client))
    assert client.post("/v1/admin/users/delete", json={"identities": [1, "2", 2]}, headers=h).json() == {"deleted": ["1", "2"]}
    r = client.post("/v1/admin/users/delete", json={"identities": []}, headers=h)
    assert r.status_code == 400


def test_profile_update_route(client, directory):
    h = _auth(_login(client))
    r = client.put("/v1/admin/users/42", json={"fields": {"weight": 81}}, headers=h)
    assert r.status_code == 200
    assert r.json()["weight"] == 81
    assert directory.scoped_tokens[-1] == "tok-admin"
    events = client.get("/v1/admin/users/42/activity", headers=h).json()["events"]
    assert events[0]["description"] == "Profile updated: weight"


def test_store_touching_routes_run_in_threadpool(app):
    routes = [r for r in app.routes if getattr(r, "path", "").startswith("/v1/")]
    assert routes
    for r in routes:
        assert not inspect.iscoroutinefunction(r.endpoint), r.path
