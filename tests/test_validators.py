"""Tests for the form shape checks."""
from __future__ import annotations

import pytest

from homeservices.validators import (is_valid_email, is_valid_password, is_valid_phone,
                                     strip_non_digits)


@pytest.mark.parametrize("email", ["ann@x.com", "a.b@c.d.e", "x@y.z"])
def test_valid_emails(email) -> None:
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email", ["", "ann", "ann@x", "ann @x.com", "ann@x .com", "a@b@c.com", "ann@x.com\n"]
)
def test_invalid_emails(email) -> None:
    assert not is_valid_email(email)


def test_phone_must_be_exactly_ten_ascii_digits() -> None:
    assert is_valid_phone("1234567890")
    assert not is_valid_phone("12345")
    assert not is_valid_phone("12345678901")
    assert not is_valid_phone("123-456-7890")
    assert not is_valid_phone("1234567890\n")
    assert not is_valid_phone("١٢٣٤٥٦٧٨٩٠")


def test_password_minimum_length() -> None:
    assert not is_valid_password("12345")
    assert is_valid_password("123456")


def test_strip_non_digits() -> None:
    assert strip_non_digits("(999) 888-7771") == "9998887771"
    assert strip_non_digits("abc") == ""
