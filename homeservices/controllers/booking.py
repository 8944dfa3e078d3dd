"""Home page: service catalogue and the booking dialog."""
from __future__ import annotations

import datetime as dt
import math
from zoneinfo import ZoneInfo

from ..formatting import DEFAULT_CURRENCY, format_price, parse_price
from ..models import Booking, BookingStatus, generate_id, utc_now
from ..state import AppState
from . import INVALID_PAYLOAD, Outcome, fail, login_required
from .bookings_list import present_booking


def local_today(timezone: str, now: dt.datetime | None = None) -> dt.date:
    """Calendar date in ``timezone``, which is what customers pick dates in."""
    return (now or utc_now()).astimezone(ZoneInfo(timezone)).date()


def _today(today: dt.date | None) -> dt.date:
    return today or utc_now().date()


def load_home(state: AppState, catalog: list[dict[str, object]], symbol: str = DEFAULT_CURRENCY) -> Outcome:
    services = [
        {
            "name": item["name"],
            "price": item["price"],
            "display_price": format_price(item["price"], symbol),
        }
        for item in catalog
    ]
    user_name = state.current_user.name if state.current_user else None
    return Outcome(data={"user_name": user_name, "services": services})


def open_booking_dialog(
    service: str,
    price: int | float | str,
    today: dt.date | None = None,
    symbol: str = DEFAULT_CURRENCY,
) -> Outcome:
    """Pre-fill the booking dialog; past dates are not selectable."""
    try:
        amount = int(float(price))
    except (TypeError, ValueError):
        return fail(INVALID_PAYLOAD, "price must be a number", field="price")

    return Outcome(
        data={
            "dialog": {
                "service_name": service,
                "service_price": f"{symbol}{amount}",
                "min_date": _today(today).isoformat(),
            }
        }
    )


def close_booking_dialog() -> Outcome:
    """Discard whatever was typed into the dialog."""
    return Outcome(data={"dialog": None})


def submit_booking(
    state: AppState,
    service: str,
    price: str,
    address: str,
    date: str,
    time: str,
    today: dt.date | None = None,
    symbol: str = DEFAULT_CURRENCY,
) -> Outcome:
    if state.current_user is None:
        return login_required()

    fields = (("service", service), ("price", price), ("address", address), ("date", date), ("time", time))
    missing = [name for name, value in fields if not value.strip()]
    if missing:
        return fail(INVALID_PAYLOAD, f"missing required fields: {', '.join(missing)}", field=missing[0])

    # The stored text is summed into the bookings total later on.
    try:
        amount = parse_price(price, symbol)
    except ValueError:
        return fail(INVALID_PAYLOAD, "Invalid price", field="price")
    if not math.isfinite(amount) or amount < 0:
        return fail(INVALID_PAYLOAD, "Invalid price", field="price")

    try:
        booking_date = dt.date.fromisoformat(date)
    except ValueError:
        return fail(INVALID_PAYLOAD, "Invalid date format, use YYYY-MM-DD", field="date")

    if booking_date < _today(today):
        return fail(INVALID_PAYLOAD, "Booking date cannot be in the past", field="date")

    booking = Booking(
        id=generate_id(),
        user_id=state.current_user.id,
        service=service,
        price=price,
        address=address,
        date=date,
        time=time,
        status=BookingStatus.CONFIRMED,
        created_at=utc_now(),
    )
    state.bookings.append(booking)

    return Outcome(
        data={"booking": present_booking(state, booking)},
        message="Booking confirmed successfully!",
        redirect="bookings",
        changed=True,
    )

