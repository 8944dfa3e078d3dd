"""Profile page."""
from __future__ import annotations

from ..formatting import format_short_date
from ..models import BookingStatus
from ..state import AppState
from . import INVALID_PAYLOAD, Outcome, fail, login_required

RECENT_ACTIVITY_LIMIT = 5


def _avatar_initial(name: str) -> str:
    return name[:1].upper()


def load_profile(state: AppState) -> Outcome:
    if state.current_user is None:
        return login_required()

    user = state.find_user(state.current_user.id)
    if user is None:
        return Outcome(data={"profile": None})

    return Outcome(
        data={
            "profile": {
                "name": user.name,
                "email": user.email,
                "avatar_initial": _avatar_initial(user.name),
                "avatar_url": user.avatar_url,
                "phone": user.phone,
                "address": user.address or "",
            }
        }
    )


def profile_stats(state: AppState) -> Outcome:
    if state.current_user is None:
        return login_required()

    owned = state.owned_bookings()
    completed = sum(1 for b in owned if b.status is BookingStatus.COMPLETED)
    return Outcome(data={"total_bookings": len(owned), "completed_bookings": completed})


def recent_activity(state: AppState, limit: int = RECENT_ACTIVITY_LIMIT) -> Outcome:
    """Most recently created bookings of the signed-in user, newest first."""
    if state.current_user is None:
        return login_required()

    indexed = list(enumerate(state.owned_bookings()))
    indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
    activity = [
        {
            "id": booking.id,
            "service": booking.service,
            "status": booking.status.value,
            "date": booking.date,
            "time": booking.time,
            "booked_on": format_short_date(booking.created_at),
        }
        for _, booking in indexed[:limit]
    ]
    return Outcome(data={"activity": activity})


def update_profile(state: AppState, name: str, phone: str, address: str) -> Outcome:
    if state.current_user is None:
        return login_required()

    user = state.find_user(state.current_user.id)
    if user is None:
        return Outcome(data={"profile": None})

    user.name = name
    user.phone = phone
    user.address = address

    state.current_user.name = name
    state.current_user.phone = phone

    outcome = load_profile(state)
    outcome.message = "Profile updated successfully!"
    outcome.changed = True
    return outcome


def update_avatar(state: AppState, url: str) -> Outcome:
    """Store an external image URL as the avatar; only emptiness is checked."""
    if state.current_user is None:
        return login_required()

    url = url.strip()
    if not url:
        return fail(INVALID_PAYLOAD, "Please enter a valid image URL", field="url")

    user = state.find_user(state.current_user.id)
    if user is None:
        return Outcome(data={"avatar_url": None})

    user.avatar_url = url
    return Outcome(data={"avatar_url": url}, changed=True)
