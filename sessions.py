"""
Server-side session table.

Sessions expire a fixed interval after creation; activity does not extend them.
Expired entries are dropped lazily on lookup and in bulk by ``sweep()``, which
``tick()`` runs at most once per sweep interval.
"""

import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from itsdangerous import BadSignature, Signer

from models import utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(hours=24)
DEFAULT_SWEEP_INTERVAL = timedelta(hours=1)


@dataclass
class SessionRecord:
    sid: str
    created_at: datetime
    expires_at: datetime
    data: Dict[str, Any] = field(default_factory=dict)

    def is_expired(self, now):
        return now >= self.expires_at


class SessionStore:
    def __init__(self, lifetime=DEFAULT_LIFETIME, sweep_interval=DEFAULT_SWEEP_INTERVAL, clock=utcnow):
        self.lifetime = lifetime
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, SessionRecord] = {}
        self._last_sweep = clock()

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def create(self, data=None) -> SessionRecord:
        now = self._clock()
        record = SessionRecord(
            sid=secrets.token_urlsafe(32),
            created_at=now,
            expires_at=now + self.lifetime,
            data=dict(data or {}),
        )
        with self._lock:
            self._sessions[record.sid] = record
        return record

    def get(self, sid) -> Optional[SessionRecord]:
        now = self._clock()
        with self._lock:
            record = self._sessions.get(sid)
            if record is None:
                return None
            if record.is_expired(now):
                del self._sessions[sid]
                return None
            return record

    def destroy(self, sid):
        with self._lock:
            record = self._sessions.pop(sid, None)
        if record is not None:
            logger.debug("Destroyed session after %s", self._clock() - record.created_at)

    def sweep(self, now=None):
        """Remove every expired session. Returns the number removed."""
        now = now or self._clock()
        with self._lock:
            expired = [sid for sid, r in self._sessions.items() if r.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
            self._last_sweep = now
        if expired:
            logger.info("Swept %d expired session(s)", len(expired))
        return len(expired)

    def tick(self, now=None):
        """Sweep if the sweep interval has elapsed since the last sweep."""
        now = now or self._clock()
        if now - self._last_sweep < self.sweep_interval:
            return 0
        return self.sweep(now)


class SessionCookieSigner:
    """Signs session ids for the cookie so tampered values never hit the table."""

    def __init__(self, secret_key):
        self._signer = Signer(secret_key, salt="campus-events-session")

    def sign(self, sid):
        return self._signer.sign(sid).decode("utf-8")

    def unsign(self, value):
        if not value:
            return None
        try:
            return self._signer.unsign(value).decode("utf-8")
        except BadSignature:
            logger.debug("Rejected session cookie with bad signature")
            return None
