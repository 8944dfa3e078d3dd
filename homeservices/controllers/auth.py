"""Entry page: registration, login, logout."""
from __future__ import annotations

from ..models import Session, User, generate_id, utc_now
from ..state import AppState
from ..validators import MIN_PASSWORD_LENGTH, is_valid_password
from . import CONFLICT, INVALID_PAYLOAD, UNAUTHORIZED, Outcome, fail

PANELS = ("login", "register")


def show_panel(panel: str) -> Outcome:
    """Switch between the login and register panels; pending errors are dropped."""
    if panel not in PANELS:
        return fail(INVALID_PAYLOAD, f"panel must be one of: {', '.join(PANELS)}")
    return Outcome(data={"panel": panel})


def register(state: AppState, name: str, email: str, phone: str, password: str) -> Outcome:
    if not name.strip() or not email.strip() or not phone.strip():
        return fail(INVALID_PAYLOAD, "name, email, and phone are required")

    if not is_valid_password(password):
        return fail(
            INVALID_PAYLOAD,
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            field="password",
        )

    if state.find_user_by_email(email) is not None:
        return fail(CONFLICT, "Email already registered. Please login.", field="email")

    user = User(
        id=generate_id(),
        name=name,
        email=email,
        phone=phone,
        password=password,
        address="",
        created_at=utc_now(),
    )
    state.users.append(user)
    state.current_user = Session.for_user(user)

    return Outcome(
        data={"user": state.current_user.to_dict()},
        redirect="home",
        changed=True,
    )


def login(state: AppState, email: str, password: str) -> Outcome:
    # Plaintext comparison; passwords are never hashed in this app.
    user = next(
        (u for u in state.users if u.email == email and u.password == password),
        None,
    )
    if user is None:
        return fail(UNAUTHORIZED, "Invalid email or password")

    state.current_user = Session.for_user(user)
    return Outcome(
        data={"user": state.current_user.to_dict()},
        redirect="home",
        changed=True,
    )


def logout(state: AppState) -> Outcome:
    """Sign out and wipe every collection, users included."""
    state.current_user = None
    state.users.clear()
    state.bookings.clear()
    state.feedbacks.clear()
    return Outcome(redirect="index", reset=True)
