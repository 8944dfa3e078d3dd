"""Registration and login without HTTP."""
from __future__ import annotations

from homeservices.controllers import auth
from homeservices.state import AppState


def _register(state: AppState, **overrides):
    fields = {"name": "Ann", "email": "ann@x.com", "phone": "9998887771", "password": "secret1"}
    fields.update(overrides)
    return auth.register(state, **fields)


def test_register_creates_user_and_session() -> None:
    state = AppState()

    outcome = _register(state)

    assert outcome.ok
    assert outcome.changed
    assert outcome.redirect == "home"
    assert len(state.users) == 1
    user = state.users[0]
    assert user.address == ""
    assert user.password == "secret1"
    assert state.current_user.id == user.id
    assert (state.current_user.name, state.current_user.email, state.current_user.phone) == (
        "Ann",
        "ann@x.com",
        "9998887771",
    )


def test_register_short_password() -> None:
    state = AppState()

    outcome = _register(state, password="12345")

    assert outcome.error == "invalid_payload"
    assert outcome.message == "Password must be at least 6 characters long"
    assert state.users == []
    assert state.current_user is None


def test_register_duplicate_email_leaves_users_alone() -> None:
    state = AppState()
    _register(state)
    before = list(state.users)

    outcome = _register(state, name="Other", password="another1")

    assert outcome.error == "conflict"
    assert outcome.message == "Email already registered. Please login."
    assert state.users == before


def test_register_requires_name_email_and_phone() -> None:
    outcome = _register(AppState(), name="  ")
    assert outcome.error == "invalid_payload"


def test_login_requires_exact_match() -> None:
    state = AppState()
    _register(state)
    state.current_user = None

    assert auth.login(state, "ann@x.com", "wrong!!").error == "unauthorized"
    assert auth.login(state, "ANN@x.com", "secret1").error == "unauthorized"
    assert state.current_user is None

    outcome = auth.login(state, "ann@x.com", "secret1")
    assert outcome.ok
    assert outcome.redirect == "home"
    assert state.current_user.email == "ann@x.com"


def test_failed_login_keeps_existing_session() -> None:
    state = AppState()
    _register(state)
    session = state.current_user

    auth.login(state, "ann@x.com", "nope123")

    assert state.current_user is session


def test_logout_wipes_everything() -> None:
    state = AppState()
    _register(state)

    outcome = auth.logout(state)

    assert outcome.reset
    assert outcome.redirect == "index"
    assert state.current_user is None
    assert state.users == []


def test_show_panel() -> None:
    assert auth.show_panel("register").data == {"panel": "register"}
    assert auth.show_panel("settings").error == "invalid_payload"
