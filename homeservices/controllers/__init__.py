"""Page controllers.

Every operation takes the ``AppState`` plus the submitted fields, mutates
the state in place and returns an ``Outcome`` describing what to render.
"""
from __future__ import annotations

from dataclasses import dataclass, field

INVALID_PAYLOAD = "invalid_payload"
UNAUTHORIZED = "unauthorized"
CONFLICT = "conflict"
CONFIRMATION_REQUIRED = "confirmation_required"

LOGIN_REQUIRED_MESSAGE = "Please login first"


@dataclass
class Outcome:
    data: dict[str, object] = field(default_factory=dict)
    error: str | None = None
    message: str | None = None
    # Form field the error belongs to, for inline display.
    field_name: str | None = None
    # Page to navigate to after the action.
    redirect: str | None = None
    # True when the state must be persisted.
    changed: bool = False
    # True when all persisted state must be wiped instead.
    reset: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def fail(error: str, message: str, field: str | None = None) -> Outcome:
    return Outcome(error=error, message=message, field_name=field)


def login_required() -> Outcome:
    return fail(UNAUTHORIZED, LOGIN_REQUIRED_MESSAGE)
