"""Feedback page.

Only wired up when ``FEEDBACK_ENABLED`` is set.  Besides submission, stats
and listing, ``check_field`` reproduces the as-you-type validation of the
email and phone inputs so a client can show the same inline errors.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..formatting import format_short_date
from ..models import Feedback, generate_id, utc_now
from ..state import AppState
from ..validators import PHONE_LENGTH, is_valid_email, is_valid_phone, strip_non_digits
from . import INVALID_PAYLOAD, Outcome, fail, login_required

MAX_RATING = 5
DEFAULT_SERVICE = "General"

EMAIL_ERROR = "Please enter a valid email address"
PHONE_ERROR = "Phone number must be exactly 10 digits"
PHONE_TOO_LONG_ERROR = "Phone number cannot exceed 10 digits"
RATING_ERROR = "Please select a rating"

FIELDS = ("email", "phone")
EVENTS = ("input", "blur")


def star_scale(rating: int) -> str:
    return "★" * rating + "☆" * (MAX_RATING - rating)


def average_rating(ratings: list[int]) -> float:
    if not ratings:
        return 0.0
    average = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _parse_rating(rating) -> int | None:
    if isinstance(rating, bool):
        return None
    try:
        value = int(rating)
    except (TypeError, ValueError):
        return None
    if isinstance(rating, float) and not rating.is_integer():
        return None
    return value if 1 <= value <= MAX_RATING else None


def present_feedback(feedback: Feedback) -> dict[str, object]:
    return {
        "id": feedback.id,
        "service": feedback.service,
        "rating": feedback.rating,
        "stars": star_scale(feedback.rating),
        "message": feedback.message,
        "category": feedback.category,
        "email": feedback.email,
        "phone": feedback.phone,
        "created_at": feedback.created_at.isoformat(),
        "display_date": format_short_date(feedback.created_at),
    }


def feedback_stats(state: AppState) -> Outcome:
    if state.current_user is None:
        return login_required()

    ratings = [f.rating for f in state.owned_feedbacks()]
    return Outcome(data={"count": len(ratings), "average_rating": average_rating(ratings)})


def list_feedback(state: AppState) -> Outcome:
    """Signed-in user's feedback, newest first."""
    if state.current_user is None:
        return login_required()

    indexed = list(enumerate(state.owned_feedbacks()))
    indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
    return Outcome(data={"feedback": [present_feedback(f) for _, f in indexed]})


def submit_feedback(
    state: AppState,
    email: str,
    phone: str,
    service: str,
    rating,
    message: str,
    category: str,
) -> Outcome:
    if state.current_user is None:
        return login_required()

    email = email.strip()
    phone = phone.strip()

    if not is_valid_email(email):
        return fail(INVALID_PAYLOAD, EMAIL_ERROR, field="email")

    if not is_valid_phone(phone):
        return fail(INVALID_PAYLOAD, PHONE_ERROR, field="phone")

    value = _parse_rating(rating)
    if value is None:
        return fail(INVALID_PAYLOAD, RATING_ERROR, field="rating")

    feedback = Feedback(
        id=generate_id(),
        user_id=state.current_user.id,
        email=email,
        phone=phone,
        service=service or DEFAULT_SERVICE,
        rating=value,
        message=message,
        category=category,
        created_at=utc_now(),
    )
    state.feedbacks.append(feedback)

    return Outcome(
        data={
            "feedback": present_feedback(feedback),
            "stats": feedback_stats(state).data,
            "items": list_feedback(state).data["feedback"],
        },
        message="Thank you for your feedback!",
        changed=True,
    )


def check_field(field: str, event: str, value: str, has_error: bool = False) -> Outcome:
    """Inline validation for one keystroke (``input``) or focus loss (``blur``).

    ``data["value"]`` is the value the field should now hold and
    ``data["error"]`` the inline message: a string to show, ``""`` to clear,
    or ``None`` to leave the current message alone.
    """
    if field not in FIELDS or event not in EVENTS:
        return fail(INVALID_PAYLOAD, "field must be email or phone and event input or blur")

    error: str | None = None
    if field == "email":
        if event == "blur":
            error = EMAIL_ERROR if value.strip() and not is_valid_email(value.strip()) else ""
        elif has_error and is_valid_email(value.strip()):
            error = ""
    elif event == "input":
        value = strip_non_digits(value)
        if value and len(value) != PHONE_LENGTH:
            error = f"{PHONE_ERROR} ({len(value)}/{PHONE_LENGTH})"
        else:
            error = ""
    else:
        stripped = value.strip()
        if stripped and not is_valid_phone(stripped):
            error = PHONE_TOO_LONG_ERROR if len(stripped) > PHONE_LENGTH else PHONE_ERROR

    return Outcome(data={"field": field, "value": value, "error": error})
