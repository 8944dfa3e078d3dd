"""Shape checks for form input."""
from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\d{10}", re.ASCII)
NON_DIGITS = re.compile(r"\D", re.ASCII)

MIN_PASSWORD_LENGTH = 6
PHONE_LENGTH = 10


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_password(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH


def strip_non_digits(value: str) -> str:
    return NON_DIGITS.sub("", value)
