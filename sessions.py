"""Server-side sessions.

The cookie only carries an opaque token; the session data lives in a
``SessionStore``. Entries expire after an idle window which every request
carrying the session refreshes.
"""
import secrets
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import current_app, g, session
from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict


class SessionStoreError(Exception):
    pass


@dataclass(frozen=True)
class AdminIdentity:
    username: str


class SessionStore:
    def get(self, sid: str) -> Optional[dict]:
        raise NotImplementedError

    def save(self, sid: str, data: dict) -> None:
        raise NotImplementedError

    def delete(self, sid: str) -> None:
        raise NotImplementedError

    def sweep(self) -> int:
        raise NotImplementedError

    def maybe_sweep(self) -> int:
        return self.sweep()


class MemorySessionStore(SessionStore):
    """Process-wide map of token -> (data, last used)."""

    def __init__(self, ttl_seconds, sweep_seconds=60, clock=time.monotonic):
        self.ttl = ttl_seconds
        self.sweep_seconds = sweep_seconds
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _expired(self, last_used, now):
        return now - last_used > self.ttl

    def get(self, sid):
        now = self._clock()
        with self._lock:
            entry = self._entries.get(sid)
            if entry is None:
                return None
            data, last_used = entry
            if self._expired(last_used, now):
                del self._entries[sid]
                return None
            self._entries[sid] = (data, now)
            return dict(data)

    def save(self, sid, data):
        with self._lock:
            self._entries[sid] = (dict(data), self._clock())

    def delete(self, sid):
        with self._lock:
            self._entries.pop(sid, None)

    def sweep(self):
        now = self._clock()
        with self._lock:
            stale = [sid for sid, (_, last_used) in self._entries.items()
                     if self._expired(last_used, now)]
            for sid in stale:
                del self._entries[sid]
            self._last_sweep = now
        return len(stale)

    def maybe_sweep(self):
        if self._clock() - self._last_sweep >= self.sweep_seconds:
            return self.sweep()
        return 0

    def __len__(self):
        return len(self._entries)


class ServerSession(CallbackDict, SessionMixin):
    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True
        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False


def _new_sid():
    return secrets.token_urlsafe(32)


class MemorySessionInterface(SessionInterface):
    def __init__(self, store: SessionStore, idle: timedelta):
        self.store = store
        self.idle = idle

    @classmethod
    def from_config(cls, config):
        idle = timedelta(minutes=config["SESSION_IDLE_MINUTES"])
        store = MemorySessionStore(idle.total_seconds(), config["SESSION_SWEEP_SECONDS"])
        return cls(store, idle)

    def open_session(self, app, request):
        swept = self.store.maybe_sweep()
        if swept:
            app.logger.debug(f"Swept {swept} idle sessions")
        sid = request.cookies.get(self.get_cookie_name(app))
        if sid:
            data = self.store.get(sid)
            if data is not None:
                return ServerSession(data, sid=sid)
        # never adopt a token the store does not know
        return ServerSession(sid=_new_sid(), new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        self.store.save(session.sid, dict(session))
        response.set_cookie(
            name,
            session.sid,
            expires=datetime.now(timezone.utc) + self.idle,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )

    def destroy(self, session):
        try:
            self.store.delete(session.sid)
        except Exception as e:
            raise SessionStoreError(str(e)) from e
        session.clear()


def destroy_session():
    current_app.session_interface.destroy(session)


def load_identity():
    """Put the validated identity for this request on ``g.identity``."""
    if session.get("authenticated") and session.get("admin_user"):
        g.identity = AdminIdentity(session["admin_user"])
    else:
        g.identity = None
