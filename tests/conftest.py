"""pytest configuration: path management and shared app fixtures."""
from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import pytest

# Ensure the project root is available on sys.path so tests can import the app package.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from homeservices import create_app  # noqa: E402
from homeservices.config import DefaultConfig  # noqa: E402
from homeservices.controllers.booking import local_today  # noqa: E402

ANN = {
    "name": "Ann",
    "email": "ann@x.com",
    "phone": "9998887771",
    "password": "secret1",
}


def booking_today():
    return local_today(DefaultConfig.BOOKING_TIMEZONE)


def tomorrow() -> str:
    return (booking_today() + timedelta(days=1)).isoformat()


@pytest.fixture
def app():
    return create_app({"TESTING": True, "SECRET_KEY": "test-secret"})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in_client(client):
    response = client.post("/auth/register", json=ANN)
    assert response.status_code == 201
    return client


def book(client, service="Cleaning", price="₹500", date=None, time="10:00", address="12 MG Road"):
    return client.post(
        "/bookings",
        json={
            "service": service,
            "price": price,
            "address": address,
            "date": date or tomorrow(),
            "time": time,
        },
    )
