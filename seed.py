"""Demo accounts and events loaded at startup when SEED_DEMO_DATA is on."""

import logging

from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    {
        "username": "admin",
        "password": "admin123",
        "name": "Admin User",
        "email": "admin@example.com",
        "is_admin": True,
    },
    {
        "username": "user",
        "password": "pass1111",
        "name": "Regular User",
        "email": "user@example.com",
        "is_admin": False,
    },
]

DEMO_EVENTS = [
    {
        "title": "Annual Tech Fest",
        "description": "Join us for the biggest tech event of the year! Participate in hackathons, workshops, and tech talks from industry experts.",
        "venue": "University Auditorium",
        "date": "2024-04-15T15:00:00",
        "end_date": "2024-04-15T23:00:00",
        "image_url": "https://images.unsplash.com/photo-1492684223066-81342ee5ff30?auto=format&fit=crop&w=800&q=80",
        "category": "Technical",
        "featured": True,
        "organizer": "Department of Computer Science",
    },
    {
        "title": "University Cricket Tournament",
        "description": "The annual inter-department cricket tournament. Come cheer for your department's team!",
        "venue": "Sports Complex",
        "date": "2024-04-25T10:00:00",
        "end_date": "2024-04-25T18:00:00",
        "image_url": "https://images.unsplash.com/photo-1540747913346-19e32dc3e97e?auto=format&fit=crop&w=800&q=80",
        "category": "Sports",
        "featured": True,
        "organizer": "Sports Department",
    },
    {
        "title": "Cultural Night",
        "description": "A celebration of diverse cultures through music, dance, and art performances by students.",
        "venue": "University Auditorium",
        "date": "2024-05-10T18:00:00",
        "end_date": "2024-05-10T22:00:00",
        "image_url": "https://images.unsplash.com/photo-1514525253161-7a46d19cd819?auto=format&fit=crop&w=800&q=80",
        "category": "Cultural",
        "featured": False,
        "organizer": "Cultural Club",
    },
    {
        "title": "Research Symposium",
        "description": "Annual gathering for showcasing student and faculty research. Featuring keynote speakers from industry experts.",
        "venue": "University Auditorium",
        "date": "2024-05-20T09:00:00",
        "end_date": "2024-05-20T17:00:00",
        "image_url": "https://images.unsplash.com/photo-1558403194-611308249627?auto=format&fit=crop&w=800&q=80",
        "category": "Academic",
        "featured": False,
        "organizer": "Research Department",
    },
    {
        "title": "Football Championship",
        "description": "The most anticipated football tournament of the season. Come and support your favorite teams!",
        "venue": "Sports Complex",
        "date": "2024-06-05T15:00:00",
        "end_date": "2024-06-05T19:00:00",
        "image_url": "https://images.unsplash.com/photo-1459865264687-595d652de67e?auto=format&fit=crop&w=800&q=80",
        "category": "Sports",
        "featured": True,
        "organizer": "Sports Club",
    },
    {
        "title": "Robotics Workshop",
        "description": "Hands-on workshop on building and programming robots. Perfect for beginners and enthusiasts alike!",
        "venue": "University Auditorium",
        "date": "2024-06-15T10:00:00",
        "end_date": "2024-06-15T16:00:00",
        "image_url": "https://images.unsplash.com/photo-1557804506-669a67965ba0?auto=format&fit=crop&w=800&q=80",
        "category": "Technical",
        "featured": False,
        "organizer": "Robotics Club",
    },
]


def seed_storage(storage):
    for data in DEMO_ACCOUNTS:
        storage.create_account({**data, "password": generate_password_hash(data["password"])})
    for data in DEMO_EVENTS:
        storage.create_event(data)
    logger.info("Seeded %d accounts and %d events", len(DEMO_ACCOUNTS), len(DEMO_EVENTS))
