"""Tests for login and logout."""
from __future__ import annotations

from conftest import ANN


def _register_then_sign_out_session(client) -> None:
    client.post("/auth/register", json=ANN)
    # Drop only the signed-in user, keeping the registered users around.
    with client.session_transaction() as sess:
        sid = sess["sid"]
    bucket = client.application.extensions["session_storage"][sid]
    bucket["currentUser"] = "null"


def test_login_success(client) -> None:
    _register_then_sign_out_session(client)

    response = client.post("/auth/login", json={"email": "ann@x.com", "password": "secret1"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["user"]["email"] == "ann@x.com"
    assert body["redirect"] == "/pages/home"


def test_login_invalid_password(client) -> None:
    _register_then_sign_out_session(client)

    response = client.post("/auth/login", json={"email": "ann@x.com", "password": "BadPass"})

    assert response.status_code == 401
    body = response.get_json()
    assert body["error"] == "unauthorized"
    assert body["message"] == "Invalid email or password"
    assert client.get("/pages/home").status_code == 302


def test_login_unknown_user(client) -> None:
    response = client.post("/auth/login", json={"email": "nobody@x.com", "password": "secret1"})

    assert response.status_code == 401


def test_logout_wipes_all_session_data(signed_in_client) -> None:
    response = signed_in_client.post("/auth/logout")

    assert response.status_code == 200
    assert response.get_json()["redirect"] == "/pages/index"
    assert signed_in_client.application.extensions["session_storage"] == {}

    # The account itself is gone as well.
    response = signed_in_client.post("/auth/login", json={"email": "ann@x.com", "password": "secret1"})
    assert response.status_code == 401


def test_auth_panel_toggle(client) -> None:
    assert client.get("/auth/panel/register").get_json() == {"panel": "register"}
    assert client.get("/auth/panel/other").status_code == 400
