"""Bookings page: listing, status filter, cancellation and the running total."""
from __future__ import annotations

from ..formatting import DEFAULT_CURRENCY, format_long_date, format_price, parse_price
from ..models import Booking, BookingStatus
from ..state import AppState
from . import CONFIRMATION_REQUIRED, Outcome, fail, login_required

ALL = "all"
FILTERS = (ALL,) + tuple(status.value for status in BookingStatus)

CANCEL_PROMPT = "Are you sure you want to cancel this booking?"


def present_booking(state: AppState, booking: Booking) -> dict[str, object]:
    """Booking as shown to the user, with owner details looked up live."""
    owner = state.find_user(booking.user_id)
    return {
        "id": booking.id,
        "service": booking.service,
        "price": booking.price,
        "address": booking.address,
        "date": booking.date,
        "display_date": format_long_date(booking.date),
        "time": booking.time,
        "status": booking.status.value,
        "cancellable": booking.status is BookingStatus.CONFIRMED,
        "created_at": booking.created_at.isoformat(),
        "user_name": owner.name if owner else None,
        "user_email": owner.email if owner else None,
        "user_phone": owner.phone if owner else None,
    }


def filter_bookings(bookings: list[Booking], status_filter: str) -> list[Booking]:
    if status_filter not in FILTERS or status_filter == ALL:
        return list(bookings)
    return [b for b in bookings if b.status.value == status_filter]


def list_bookings(state: AppState, status_filter: str = ALL) -> Outcome:
    if state.current_user is None:
        return login_required()

    if status_filter not in FILTERS:
        status_filter = ALL

    selected = filter_bookings(state.owned_bookings(), status_filter)
    return Outcome(
        data={
            "filter": status_filter,
            "bookings": [present_booking(state, b) for b in selected],
        }
    )


def cancel_booking(state: AppState, booking_id: str, confirmed: bool = False) -> Outcome:
    if state.current_user is None:
        return login_required()

    if not confirmed:
        return fail(CONFIRMATION_REQUIRED, CANCEL_PROMPT)

    booking = next((b for b in state.owned_bookings() if b.id == booking_id), None)
    if booking is None:
        return Outcome(data={"booking": None})

    booking.status = BookingStatus.CANCELLED
    return Outcome(
        data={"booking": present_booking(state, booking)},
        message="Booking cancelled successfully",
        changed=True,
    )


def compute_total(bookings: list[Booking], symbol: str = DEFAULT_CURRENCY) -> float:
    return sum(
        parse_price(b.price, symbol) for b in bookings if b.status is not BookingStatus.CANCELLED
    )


def total_price(state: AppState, symbol: str = DEFAULT_CURRENCY) -> Outcome:
    if state.current_user is None:
        return login_required()

    total = compute_total(state.owned_bookings(), symbol)
    return Outcome(data={"total": total, "display_total": format_price(total, symbol)})
