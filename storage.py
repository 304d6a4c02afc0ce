"""
Entity store for accounts, events and registrations.

``Storage`` is the interface the request layer talks to; ``MemStorage`` keeps
everything in process memory.

Invariants:
    - Ids are issued from one counter per entity type and never reused.
    - Lookups by an absent id return None, never raise.
    - Each call is indivisible with respect to other calls on the same store.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import fields, replace
from typing import Any, Dict, List, Mapping, Optional

from errors import ValidationError
from models import ALL_CATEGORIES, Account, Event, Registration, to_timestamp

logger = logging.getLogger(__name__)

# Transient upload fields that may ride along with event payloads.
_TRANSIENT_EVENT_FIELDS = ("image_file", "imageFile")

_EVENT_FIELDS = {f.name for f in fields(Event)} - {"id"}
_ACCOUNT_FIELDS = {f.name for f in fields(Account)} - {"id"}
_REGISTRATION_FIELDS = {f.name for f in fields(Registration)} - {"id"}


class Storage(ABC):
    """Interface for entity persistence operations."""

    # Accounts

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        ...

    @abstractmethod
    def get_account_by_username(self, username: str) -> Optional[Account]:
        """Case-insensitive exact match on username."""
        ...

    @abstractmethod
    def get_account_by_email(self, email: str) -> Optional[Account]:
        """Case-insensitive exact match on email."""
        ...

    @abstractmethod
    def create_account(self, data: Mapping[str, Any]) -> Account:
        """Store a new account. Uniqueness is the caller's responsibility."""
        ...

    # Events

    @abstractmethod
    def get_event(self, event_id: int) -> Optional[Event]:
        ...

    @abstractmethod
    def list_events(self) -> List[Event]:
        """Return all events in insertion order."""
        ...

    @abstractmethod
    def list_events_by_category(self, category: str) -> List[Event]:
        """Return events of one category, or all of them for ``"All"``."""
        ...

    @abstractmethod
    def list_featured_events(self) -> List[Event]:
        ...

    @abstractmethod
    def create_event(self, data: Mapping[str, Any]) -> Event:
        ...

    @abstractmethod
    def update_event(self, event_id: int, data: Mapping[str, Any]) -> Optional[Event]:
        """Shallow-merge ``data`` over an event, or return None if it is absent."""
        ...

    @abstractmethod
    def delete_event(self, event_id: int) -> bool:
        """Remove an event. Registrations are left untouched."""
        ...

    # Registrations

    @abstractmethod
    def get_registration(self, registration_id: int) -> Optional[Registration]:
        ...

    @abstractmethod
    def list_registrations_by_event(self, event_id: int) -> List[Registration]:
        ...

    @abstractmethod
    def list_registrations_by_user(self, user_id: int) -> List[Registration]:
        ...

    @abstractmethod
    def create_registration(self, data: Mapping[str, Any]) -> Registration:
        ...

    @abstractmethod
    def delete_registrations_by_event(self, event_id: int) -> int:
        """Remove every registration for an event and return how many went."""
        ...


def _check_fields(kind, data, allowed):
    unknown = set(data) - allowed
    if unknown:
        raise ValidationError(f"Unknown {kind} field(s): {', '.join(sorted(unknown))}")


def _lookup_key(name, value):
    if not isinstance(value, str):
        raise ValidationError(f"Account {name} must be a string")
    return value.lower()


def _normalize_event_fields(data, partial=False):
    """Drop transient fields and coerce date/end_date into timestamps."""
    record = {k: v for k, v in data.items() if k not in _TRANSIENT_EVENT_FIELDS}
    _check_fields("event", record, _EVENT_FIELDS)
    try:
        if "date" in record:
            record["date"] = to_timestamp(record["date"])
        if "end_date" in record:
            # None clears the end date; a falsy value is treated the same way.
            record["end_date"] = to_timestamp(record["end_date"]) if record["end_date"] else None
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid event date: {e}") from e
    if not partial:
        record.setdefault("featured", False)
        record.setdefault("end_date", None)
        if record["featured"] is None:
            record["featured"] = False
    return record


class MemStorage(Storage):
    """In-memory ``Storage`` backed by dicts keyed by integer id."""

    def __init__(self):
        self._lock = threading.RLock()
        self._accounts: Dict[int, Account] = {}
        self._events: Dict[int, Event] = {}
        self._registrations: Dict[int, Registration] = {}
        self._account_seq = 1
        self._event_seq = 1
        self._registration_seq = 1

    # Accounts

    def get_account(self, account_id):
        with self._lock:
            return self._accounts.get(account_id)

    def get_account_by_username(self, username):
        wanted = _lookup_key("username", username)
        with self._lock:
            return next(
                (a for a in self._accounts.values() if a.username.lower() == wanted),
                None,
            )

    def get_account_by_email(self, email):
        wanted = _lookup_key("email", email)
        with self._lock:
            return next(
                (a for a in self._accounts.values() if a.email.lower() == wanted),
                None,
            )

    def create_account(self, data):
        values = dict(data)
        _check_fields("account", values, _ACCOUNT_FIELDS)
        for name in ("username", "email"):
            _lookup_key(name, values.get(name))
        if values.get("is_admin") is None:
            values["is_admin"] = False
        with self._lock:
            try:
                account = Account(id=self._account_seq, **values)
            except TypeError as e:
                raise ValidationError(f"Invalid account data: {e}") from e
            self._account_seq += 1
            self._accounts[account.id] = account
        logger.debug("Stored account %d (%s)", account.id, account.username)
        return account

    # Events

    def get_event(self, event_id):
        with self._lock:
            return self._events.get(event_id)

    def list_events(self):
        with self._lock:
            return list(self._events.values())

    def list_events_by_category(self, category):
        if category == ALL_CATEGORIES:
            return self.list_events()
        with self._lock:
            return [e for e in self._events.values() if e.category == category]

    def list_featured_events(self):
        with self._lock:
            return [e for e in self._events.values() if e.featured]

    def create_event(self, data):
        values = _normalize_event_fields(data)
        with self._lock:
            try:
                event = Event(id=self._event_seq, **values)
            except TypeError as e:
                raise ValidationError(f"Invalid event data: {e}") from e
            self._event_seq += 1
            self._events[event.id] = event
        return event

    def update_event(self, event_id, data):
        changes = _normalize_event_fields(data, partial=True)
        with self._lock:
            event = self._events.get(event_id)
            if event is None:
                return None
            updated = replace(event, **changes)
            self._events[event_id] = updated
        return updated

    def delete_event(self, event_id):
        with self._lock:
            return self._events.pop(event_id, None) is not None

    # Registrations

    def get_registration(self, registration_id):
        with self._lock:
            return self._registrations.get(registration_id)

    def list_registrations_by_event(self, event_id):
        with self._lock:
            return [r for r in self._registrations.values() if r.event_id == event_id]

    def list_registrations_by_user(self, user_id):
        with self._lock:
            return [r for r in self._registrations.values() if r.user_id == user_id]

    def create_registration(self, data):
        values = dict(data)
        _check_fields("registration", values, _REGISTRATION_FIELDS)
        if "registration_date" in values:
            try:
                values["registration_date"] = to_timestamp(values["registration_date"])
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid registration date: {e}") from e
        with self._lock:
            try:
                registration = Registration(id=self._registration_seq, **values)
            except TypeError as e:
                raise ValidationError(f"Invalid registration data: {e}") from e
            self._registration_seq += 1
            self._registrations[registration.id] = registration
        return registration

    def delete_registrations_by_event(self, event_id):
        with self._lock:
            doomed = [rid for rid, r in self._registrations.items() if r.event_id == event_id]
            for rid in doomed:
                del self._registrations[rid]
        return len(doomed)
