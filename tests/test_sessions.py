"""Tests for the session table and cookie signing."""

from datetime import datetime, timedelta, timezone

import pytest

from sessions import SessionCookieSigner, SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(lifetime=timedelta(hours=24), sweep_interval=timedelta(hours=1), clock=clock)


class TestSessionStore:
    def test_create_and_get(self, store):
        record = store.create({"user_id": 7})
        assert store.get(record.sid).data == {"user_id": 7}
        assert len(store) == 1

    def test_fixed_expiry_ignores_activity(self, store, clock):
        record = store.create({"user_id": 7})
        clock.advance(hours=23)
        assert store.get(record.sid) is not None
        clock.advance(hours=1)
        assert store.get(record.sid) is None
        assert len(store) == 0

    def test_destroy_is_idempotent(self, store):
        record = store.create()
        store.destroy(record.sid)
        store.destroy(record.sid)
        store.destroy("never-existed")
        assert store.get(record.sid) is None

    def test_sweep_removes_only_expired(self, store, clock):
        old = store.create()
        clock.advance(hours=12)
        young = store.create()
        clock.advance(hours=13)
        assert store.sweep() == 1
        assert store.get(old.sid) is None
        assert store.get(young.sid) is not None

    def test_tick_waits_for_interval(self, store, clock):
        store.create()
        clock.advance(hours=23, minutes=30)
        assert store.sweep() == 0
        clock.advance(minutes=45)
        assert store.tick() == 0
        assert len(store) == 1
        clock.advance(minutes=15)
        assert store.tick() == 1
        assert len(store) == 0

    def test_ids_are_unique(self, store):
        assert len({store.create().sid for _ in range(50)}) == 50


class TestSessionCookieSigner:
    def test_round_trip(self):
        signer = SessionCookieSigner("secret")
        assert signer.unsign(signer.sign("abc")) == "abc"

    def test_tampered_or_foreign_values_rejected(self):
        signer = SessionCookieSigner("secret")
        other = SessionCookieSigner("another-secret")
        assert signer.unsign(other.sign("abc")) is None
        assert signer.unsign("abc") is None
        assert signer.unsign(None) is None

    def test_destroy_logs_session_age(self, store, clock, caplog):
        record = store.create()
        clock.advance(hours=2)
        with caplog.at_level("DEBUG", logger="sessions"):
            store.destroy(record.sid)
        assert "Destroyed session after 2:00:00" in caplog.text
