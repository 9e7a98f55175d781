from __future__ import annotations

from fastapi.testclient import TestClient

from hrportal.core.config import settings
from hrportal.core.tokens import create_access_token, create_refresh_token
from tests.conftest import USER_PASSWORD, login

ACCESS = settings.ACCESS_COOKIE_NAME
REFRESH = settings.REFRESH_COOKIE_NAME


def _set_cookie_headers(response, name: str) -> list[str]:
    return [h for h in response.headers.get_list("set-cookie") if h.startswith(f"{name}=")]


def _attrs(header: str) -> list[str]:
    return [part.strip().lower() for part in header.split(";")[1:]]


def _is_cleared(header: str) -> bool:
    return "max-age=0" in _attrs(header)


# ---------- login ----------
def test_login_sets_both_cookies(client: TestClient, user) -> None:
    r = login(client)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"id": user.id, "name": "Jane Doe", "email": "jane@example.com", "is_admin": False}

    [access] = _set_cookie_headers(r, ACCESS)
    [refresh] = _set_cookie_headers(r, REFRESH)
    for header in (access, refresh):
        attrs = _attrs(header)
        assert "httponly" in attrs
        assert "samesite=lax" in attrs
        assert "secure" not in attrs  # only in production
    assert f"max-age={settings.ACCESS_TOKEN_EXPIRE_SECONDS}" in _attrs(access)
    assert "path=/" in _attrs(access)
    assert f"max-age={settings.REFRESH_TOKEN_EXPIRE_SECONDS}" in _attrs(refresh)
    assert f"path={settings.refresh_cookie_path}" in _attrs(refresh)


def test_login_is_case_insensitive_on_email(client: TestClient, user) -> None:
    r = login(client, email="  JANE@example.com ")
    assert r.status_code == 200


def test_login_wrong_password_sets_no_cookies(client: TestClient, user) -> None:
    r = login(client, password="nope-nope")
    assert r.status_code == 401
    assert r.json()["code"] == "INVALID_CREDENTIALS"
    assert r.headers.get_list("set-cookie") == []


def test_login_unknown_email(client: TestClient, user) -> None:
    r = login(client, email="ghost@example.com")
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials."


def test_login_requires_email_and_password(client: TestClient) -> None:
    r = client.post("/auth/login", json={"email": "jane@example.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "Email and password are required."


# ---------- status ----------
def test_status_with_valid_session(client: TestClient, user) -> None:
    login(client)
    r = client.get("/auth/status")
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user.id


def test_status_without_cookie_is_401(client: TestClient) -> None:
    r = client.get("/auth/status")
    assert r.status_code == 401
    assert r.json()["code"] == "MISSING_TOKEN"


def test_status_with_expired_access_token_is_401(client: TestClient, user, shift_token_clock) -> None:
    shift_token_clock(settings.ACCESS_TOKEN_EXPIRE_SECONDS + 60)
    login(client)
    r = client.get("/auth/status")
    assert r.status_code == 401
    assert r.json()["code"] == "INVALID_TOKEN"
    [cleared] = _set_cookie_headers(r, ACCESS)
    assert _is_cleared(cleared) and "path=/" in _attrs(cleared)
    assert _set_cookie_headers(r, REFRESH) == []
    assert client.cookies.get(ACCESS) is None


def test_status_rejects_refresh_token_in_access_cookie(client: TestClient, user) -> None:
    client.cookies.set(ACCESS, create_refresh_token(user_id=user.id))
    r = client.get("/auth/status")
    assert r.status_code == 401


def test_status_with_garbage_access_cookie_clears_it(client: TestClient) -> None:
    client.cookies.set(ACCESS, "garbage")
    r = client.get("/auth/status")
    assert r.status_code == 401
    [cleared] = _set_cookie_headers(r, ACCESS)
    assert _is_cleared(cleared)


def test_status_for_deleted_user_clears_access_cookie(client: TestClient, user, db) -> None:
    client.cookies.set(ACCESS, create_access_token(user_id=user.id))
    db.delete(user)
    db.commit()

    r = client.get("/auth/status")
    assert r.status_code == 401
    assert r.json()["code"] == "USER_NOT_FOUND"
    [cleared] = _set_cookie_headers(r, ACCESS)
    assert _is_cleared(cleared)


# ---------- refresh ----------
def test_refresh_without_cookie_is_401(client: TestClient) -> None:
    r = client.post("/auth/refresh")
    assert r.status_code == 401
    assert r.json()["message"] == "Refresh token not found."


def test_refresh_with_forged_cookie_is_403_and_clears_it(client: TestClient) -> None:
    client.cookies.set(REFRESH, "forged.token.value")
    r = client.post("/auth/refresh")
    assert r.status_code == 403
    assert r.json()["code"] == "INVALID_TOKEN"
    [cleared] = _set_cookie_headers(r, REFRESH)
    assert _is_cleared(cleared)
    assert f"path={settings.refresh_cookie_path}" in _attrs(cleared)
    assert _set_cookie_headers(r, ACCESS) == []


def test_refresh_with_access_token_is_403(client: TestClient, user) -> None:
    client.cookies.set(REFRESH, create_access_token(user_id=user.id))
    assert client.post("/auth/refresh").status_code == 403


def test_refresh_rotates_both_cookies(client: TestClient, user) -> None:
    first = login(client)
    old_access = _set_cookie_headers(first, ACCESS)[0]
    old_refresh = _set_cookie_headers(first, REFRESH)[0]

    r = client.post("/auth/refresh")
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Access token refreshed successfully."}
    [new_access] = _set_cookie_headers(r, ACCESS)
    [new_refresh] = _set_cookie_headers(r, REFRESH)
    assert new_access.split(";")[0] != old_access.split(";")[0]
    assert new_refresh.split(";")[0] != old_refresh.split(";")[0]

    assert client.get("/auth/status").status_code == 200


def test_refresh_revives_expired_access_token(client: TestClient, user, shift_token_clock, monkeypatch) -> None:
    shift_token_clock(settings.ACCESS_TOKEN_EXPIRE_SECONDS + 60)
    login(client)
    monkeypatch.undo()

    assert client.get("/auth/status").status_code == 401
    assert client.post("/auth/refresh").status_code == 200
    assert client.get("/auth/status").status_code == 200


def test_refresh_cookie_not_sent_to_other_paths(client: TestClient, user) -> None:
    r = login(client)
    assert r.status_code == 200
    sent = client.build_request("GET", "/auth/status")
    assert REFRESH not in sent.headers.get("cookie", "")
    sent = client.build_request("POST", "/auth/refresh")
    assert REFRESH in sent.headers.get("cookie", "")


# ---------- logout ----------
def test_logout_clears_both_cookies(client: TestClient, user) -> None:
    login(client)
    r = client.post("/auth/logout")
    assert r.status_code == 204
    [access] = _set_cookie_headers(r, ACCESS)
    [refresh] = _set_cookie_headers(r, REFRESH)
    assert _is_cleared(access) and "path=/" in _attrs(access)
    assert _is_cleared(refresh) and f"path={settings.refresh_cookie_path}" in _attrs(refresh)

    assert client.cookies.get(ACCESS) is None
    assert client.cookies.get(REFRESH) is None
    assert client.get("/auth/status").status_code == 401


# ---------- register ----------
def test_register_creates_user_and_session(client: TestClient, roles) -> None:
    r = client.post(
        "/auth/register",
        json={"name": "New Hire", "email": "new.hire@example.com", "password": USER_PASSWORD},
    )
    assert r.status_code == 201, r.text
    assert r.json()["user"]["email"] == "new.hire@example.com"
    assert client.get("/auth/status").status_code == 200


def test_register_rejects_taken_email(client: TestClient, user) -> None:
    r = client.post(
        "/auth/register",
        json={"name": "Dup", "email": "jane@example.com", "password": USER_PASSWORD},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email already in use."


def test_register_requires_all_fields(client: TestClient) -> None:
    r = client.post("/auth/register", json={"email": "x@example.com"})
    assert r.status_code == 400


def test_register_rejects_malformed_email_as_400(client: TestClient, roles) -> None:
    r = client.post(
        "/auth/register",
        json={"name": "Typo", "email": "not-an-email", "password": USER_PASSWORD},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"].startswith("email:")
    assert r.headers.get_list("set-cookie") == []


def test_healthz(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_cookies_are_secure_in_production(client: TestClient, user, monkeypatch) -> None:
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    r = login(client)
    assert r.status_code == 200
    for name in (ACCESS, REFRESH):
        [header] = _set_cookie_headers(r, name)
        assert "secure" in _attrs(header)

    r = client.post("/auth/logout")
    for name in (ACCESS, REFRESH):
        [header] = _set_cookie_headers(r, name)
        assert _is_cleared(header) and "secure" in _attrs(header)
