from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from flask_login import UserMixin

CATEGORIES = ("Academic", "Cultural", "Sports", "Technical")
# Query-only value meaning "no category filter"; never stored on an event.
ALL_CATEGORIES = "All"

GUEST_USER_ID = 0


def utcnow():
    return datetime.now(timezone.utc)


def to_timestamp(value):
    """Coerce an ISO-8601 string or datetime into an aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Cannot interpret {value!r} as a timestamp")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt):
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Account(UserMixin):
    id: int
    username: str
    password: str
    name: str
    email: str
    is_admin: bool = False

    def to_public(self):
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "email": self.email,
            "isAdmin": self.is_admin,
        }


@dataclass
class Event:
    id: int
    title: str
    description: str
    venue: str
    date: datetime
    image_url: str
    category: str
    organizer: str
    end_date: Optional[datetime] = None
    featured: bool = False

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "venue": self.venue,
            "date": format_timestamp(self.date),
            "endDate": format_timestamp(self.end_date),
            "imageUrl": self.image_url,
            "category": self.category,
            "featured": self.featured,
            "organizer": self.organizer,
        }


@dataclass
class Registration:
    id: int
    user_id: int
    event_id: int
    full_name: str
    email: str
    phone: str
    tickets: int
    registration_date: datetime = field(default_factory=utcnow)

    @property
    def is_guest(self):
        return self.user_id == GUEST_USER_ID

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "eventId": self.event_id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "tickets": self.tickets,
            "registrationDate": format_timestamp(self.registration_date),
        }
