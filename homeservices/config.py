"""Default settings; override through ``create_app`` or ``APP_SETTINGS``."""
from __future__ import annotations

import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default) in {"1", "true", "True"}


class DefaultConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Without feedback the app behaves like the booking-only variant.
    FEEDBACK_ENABLED = _env_flag("FEEDBACK_ENABLED", "1")

    LANDING_PAGE = "home"
    CURRENCY_SYMBOL = "₹"
    # Booking dates are calendar days where the customers are.
    BOOKING_TIMEZONE = os.environ.get("BOOKING_TIMEZONE", "Asia/Kolkata")
    # Oldest idle session buckets are dropped past this many.
    SESSION_BUCKET_LIMIT = int(os.environ.get("SESSION_BUCKET_LIMIT", "10000"))
    CORS_ORIGINS = ["*"]

    SERVICE_CATALOG = [
        {"name": "Cleaning", "price": 500},
        {"name": "Plumbing", "price": 700},
        {"name": "Electrician", "price": 600},
        {"name": "Painting", "price": 1500},
        {"name": "Pest Control", "price": 1200},
        {"name": "Carpentry", "price": 800},
    ]
