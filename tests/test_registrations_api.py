"""HTTP tests for event registrations."""

import pytest


def _registration(event_id=1, **overrides):
    body = {
        "eventId": event_id,
        "fullName": "Priya Sharma",
        "email": "priya@example.com",
        "phone": "9876543210",
        "tickets": 2,
    }
    body.update(overrides)
    return body


class TestCreateRegistration:
    def test_guest_registration(self, client, storage):
        resp = client.post("/api/registrations", json=_registration())
        assert resp.status_code == 201
        data = resp.get_json()
        assert data["userId"] == 0
        assert data["eventId"] == 1
        assert data["tickets"] == 2
        assert data["registrationDate"].endswith("Z")
        assert storage.get_registration(data["id"]) is not None

    def test_logged_in_registration_records_user(self, user_client):
        resp = user_client.post("/api/registrations", json=_registration(tickets="3"))
        assert resp.status_code == 201
        assert resp.get_json()["userId"] == 2
        assert resp.get_json()["tickets"] == 3

    def test_unknown_event(self, client, storage):
        resp = client.post("/api/registrations", json=_registration(event_id=99999))
        assert resp.status_code == 404
        assert storage.list_registrations_by_event(99999) == []

    @pytest.mark.parametrize("overrides", [
        {"tickets": 0},
        {"email": "nope"},
        {"fullName": ""},
        {"eventId": "abc"},
        {"tickets": True},
        {"fullName": "   "},
        {"phone": " "},
    ])
    def test_validation(self, client, overrides):
        assert client.post("/api/registrations", json=_registration(**overrides)).status_code == 400


class TestListRegistrations:
    def test_by_event_is_admin_only(self, client, user_client, admin_client):
        client.post("/api/registrations", json=_registration(event_id=2))
        assert client.get("/api/registrations/event/2").status_code == 403
        assert user_client.get("/api/registrations/event/2").status_code == 403
        assert admin_client.get("/api/registrations/event/abc").status_code == 400

        resp = admin_client.get("/api/registrations/event/2")
        assert resp.status_code == 200
        assert [r["fullName"] for r in resp.get_json()] == ["Priya Sharma"]

    def test_mine(self, client, user_client):
        assert client.get("/api/registrations/user").status_code == 401

        user_client.post("/api/registrations", json=_registration(event_id=1))
        client.post("/api/registrations", json=_registration(event_id=1))
        mine = user_client.get("/api/registrations/user").get_json()
        assert len(mine) == 1
        assert mine[0]["userId"] == 2

    def test_event_delete_cascades(self, client, admin_client, storage):
        client.post("/api/registrations", json=_registration(event_id=5))
        assert admin_client.delete("/api/events/5").status_code == 204
        assert storage.list_registrations_by_event(5) == []
