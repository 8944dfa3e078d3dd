"""Router bootstrap through the pages endpoint."""
from __future__ import annotations

import pytest

from conftest import ANN, book
from homeservices import create_app


@pytest.mark.parametrize("page", ["home", "bookings", "feedback", "profile"])
def test_signed_out_pages_redirect_to_index(client, page):
    response = client.get(f"/pages/{page}")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/pages/index")


def test_index_shows_login_panel(client):
    response = client.get("/pages/index")

    assert response.status_code == 200
    assert response.get_json() == {"page": "index", "panel": "login"}


def test_signed_in_index_redirects_home(signed_in_client):
    response = signed_in_client.get("/pages/index")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/pages/home")


def test_home_page_lists_services(signed_in_client):
    data = signed_in_client.get("/pages/home").get_json()

    assert data["user_name"] == "Ann"
    assert {"name": "Cleaning", "price": 500, "display_price": "₹500"} in data["services"]


def test_bookings_page_combines_list_and_total(signed_in_client):
    book(signed_in_client)

    data = signed_in_client.get("/pages/bookings").get_json()

    assert data["filter"] == "all"
    assert len(data["bookings"]) == 1
    assert data["display_total"] == "₹500"


def test_profile_page(signed_in_client):
    data = signed_in_client.get("/pages/profile").get_json()

    assert data["profile"]["avatar_initial"] == "A"
    assert data["total_bookings"] == 0
    assert data["activity"] == []


def test_feedback_page(signed_in_client):
    data = signed_in_client.get("/pages/feedback").get_json()

    assert data == {"page": "feedback", "count": 0, "average_rating": 0, "feedback": []}


def test_unknown_page(signed_in_client):
    assert signed_in_client.get("/pages/admin").status_code == 404


def test_anonymous_visits_leave_no_session_buckets(app, client):
    for _ in range(50):
        assert client.get("/pages/index").status_code == 200
        assert client.get("/pages/home").status_code == 302
        client.get("/services")
        client.post("/feedback/validate", json={"field": "phone", "event": "input", "value": "12"})
        client.post("/auth/login", json={"email": "nobody@x.com", "password": "secret1"})

    assert app.extensions["session_storage"] == {}
    with client.session_transaction() as sess:
        assert "sid" not in sess


def test_first_write_issues_the_session_bucket(app, client):
    client.get("/pages/index")
    assert app.extensions["session_storage"] == {}

    client.post("/auth/register", json=ANN)

    with client.session_transaction() as sess:
        sid = sess["sid"]
    assert list(app.extensions["session_storage"]) == [sid]


def test_least_recently_used_bucket_is_dropped_past_the_limit():
    app = create_app({"TESTING": True, "SESSION_BUCKET_LIMIT": 2})
    first, second, third = (app.test_client() for _ in range(3))

    first.post("/auth/register", json=ANN)
    second.post("/auth/register", json=ANN)
    # Touching the first session makes the second the oldest.
    assert first.get("/pages/home").status_code == 200
    third.post("/auth/register", json=ANN)

    assert len(app.extensions["session_storage"]) == 2
    assert first.get("/pages/home").status_code == 200
    assert second.get("/pages/home").status_code == 302
    assert third.get("/pages/home").status_code == 200
