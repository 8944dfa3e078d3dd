"""Profile endpoints."""
from __future__ import annotations

from conftest import book


def test_update_profile_success_200(signed_in_client):
    response = signed_in_client.put(
        "/profile", json={"name": "Ann Lee", "phone": "1112223334", "address": "5 Park St"}
    )

    assert response.status_code == 200
    assert response.json["message"] == "Profile updated successfully!"
    assert response.json["profile"]["name"] == "Ann Lee"
    assert response.json["profile"]["address"] == "5 Park St"
    assert signed_in_client.get("/pages/home").json["user_name"] == "Ann Lee"


def test_profile_edit_shows_on_existing_bookings(signed_in_client):
    book(signed_in_client)

    signed_in_client.put("/profile", json={"name": "Ann Lee", "phone": "1112223334", "address": ""})

    listed = signed_in_client.get("/bookings").json["bookings"][0]
    assert listed["user_name"] == "Ann Lee"
    assert listed["user_phone"] == "1112223334"


def test_update_profile_requires_login(client):
    response = client.put("/profile", json={"name": "Ghost"})

    assert response.status_code == 401


def test_update_avatar(signed_in_client):
    response = signed_in_client.put("/profile/avatar", json={"url": "https://img.example.com/a.png"})

    assert response.status_code == 200
    assert signed_in_client.get("/profile").json["profile"]["avatar_url"] == (
        "https://img.example.com/a.png"
    )


def test_update_avatar_blank_400(signed_in_client):
    response = signed_in_client.put("/profile/avatar", json={"url": ""})

    assert response.status_code == 400
    assert response.json["message"] == "Please enter a valid image URL"


def test_profile_stats_and_activity(signed_in_client):
    book(signed_in_client, service="Cleaning")
    book(signed_in_client, service="Plumbing", price="₹700")

    stats = signed_in_client.get("/profile/stats").json
    activity = signed_in_client.get("/profile/activity").json["activity"]

    assert stats == {"total_bookings": 2, "completed_bookings": 0}
    assert {a["service"] for a in activity} == {"Cleaning", "Plumbing"}
