from datetime import timedelta

import pytest

from conftest import ADMIN_PASSWORD, ADMIN_USER
from sessions import MemorySessionInterface, MemorySessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def test_entry_expires_after_idle_window(clock):
    store = MemorySessionStore(ttl_seconds=60, clock=clock)
    store.save("abc", {"authenticated": True})

    clock.advance(59)
    assert store.get("abc") == {"authenticated": True}

    # the read above refreshed the idle timer
    clock.advance(59)
    assert store.get("abc") is not None

    clock.advance(61)
    assert store.get("abc") is None


def test_sweep_removes_only_idle_entries(clock):
    store = MemorySessionStore(ttl_seconds=60, clock=clock)
    store.save("old", {"n": 1})
    clock.advance(45)
    store.save("fresh", {"n": 2})
    clock.advance(30)

    assert store.sweep() == 1
    assert len(store) == 1
    assert store.get("fresh") == {"n": 2}


def test_maybe_sweep_respects_interval(clock):
    store = MemorySessionStore(ttl_seconds=10, sweep_seconds=60, clock=clock)
    store.save("a", {})
    clock.advance(20)
    assert store.maybe_sweep() == 0
    assert len(store) == 1
    clock.advance(40)
    assert store.maybe_sweep() == 1


def test_returned_data_is_a_copy(clock):
    store = MemorySessionStore(ttl_seconds=60, clock=clock)
    store.save("abc", {"x": 1})
    store.get("abc")["x"] = 2
    assert store.get("abc") == {"x": 1}


def test_idle_session_is_rejected_by_the_app(app, client, clock):
    store = MemorySessionStore(ttl_seconds=120, sweep_seconds=0, clock=clock)
    app.session_interface = MemorySessionInterface(store, timedelta(seconds=120))

    client.post("/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    clock.advance(100)
    assert client.get("/orders").status_code == 200
    clock.advance(100)
    assert client.get("/orders").status_code == 200

    clock.advance(121)
    assert client.get("/orders").status_code == 401
    assert len(store) == 0


def test_anonymous_requests_do_not_create_sessions(app, client):
    client.get("/categories")
    assert len(app.session_interface.store) == 0
