"""Page routing and the ``(page, action)`` handler table."""
from __future__ import annotations

import functools
from collections.abc import Callable

from ..state import AppState
from . import Outcome, auth, booking, bookings_list, feedback, profile

INDEX = "index"
HOME = "home"
BOOKINGS = "bookings"
FEEDBACK = "feedback"
PROFILE = "profile"

Handler = Callable[..., Outcome]


def pages(feedback_enabled: bool = True) -> tuple[str, ...]:
    names = (INDEX, HOME, BOOKINGS, FEEDBACK, PROFILE)
    return names if feedback_enabled else tuple(p for p in names if p != FEEDBACK)


def resolve(page: str, authenticated: bool, landing: str = HOME) -> tuple[str, bool]:
    """Decide which page to show.

    Returns ``(page, redirected)``.  Signed-out visitors only ever see the
    entry page; signed-in visitors of the entry page go to ``landing``.
    """
    if not authenticated and page != INDEX:
        return INDEX, True
    if authenticated and page == INDEX:
        return landing, True
    return page, False


def _stateless(func: Callable[..., Outcome]) -> Handler:
    @functools.wraps(func)
    def handler(state: AppState, **fields) -> Outcome:
        return func(**fields)

    return handler


def build_handlers(feedback_enabled: bool = True) -> dict[tuple[str, str], Handler]:
    handlers: dict[tuple[str, str], Handler] = {
        (INDEX, "show_panel"): _stateless(auth.show_panel),
        (INDEX, "register"): auth.register,
        (INDEX, "login"): auth.login,
        (HOME, "load"): booking.load_home,
        (HOME, "open_dialog"): _stateless(booking.open_booking_dialog),
        (HOME, "close_dialog"): _stateless(booking.close_booking_dialog),
        (HOME, "submit_booking"): booking.submit_booking,
        (BOOKINGS, "list"): bookings_list.list_bookings,
        (BOOKINGS, "cancel"): bookings_list.cancel_booking,
        (BOOKINGS, "total"): bookings_list.total_price,
        (PROFILE, "load"): profile.load_profile,
        (PROFILE, "stats"): profile.profile_stats,
        (PROFILE, "activity"): profile.recent_activity,
        (PROFILE, "update"): profile.update_profile,
        (PROFILE, "update_avatar"): profile.update_avatar,
    }

    # Logout is reachable from every signed-in page.
    for page in pages(feedback_enabled):
        if page != INDEX:
            handlers[(page, "logout")] = auth.logout

    if feedback_enabled:
        handlers.update(
            {
                (FEEDBACK, "submit"): feedback.submit_feedback,
                (FEEDBACK, "stats"): feedback.feedback_stats,
                (FEEDBACK, "list"): feedback.list_feedback,
                (FEEDBACK, "check_field"): _stateless(feedback.check_field),
            }
        )

    return handlers


def dispatch(
    handlers: dict[tuple[str, str], Handler],
    state: AppState,
    page: str,
    action: str,
    **fields,
) -> Outcome:
    """Run the handler registered for ``(page, action)``.

    Raises ``KeyError`` for an unregistered pair.
    """
    handler = handlers[(page, action)]
    return handler(state, **fields)
