import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "campus-events-dev-secret")

    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "campus.sid")
    AUTH_COOKIE_SECURE = _env_flag("AUTH_COOKIE_SECURE", False)
    SESSION_LIFETIME = timedelta(hours=int(os.getenv("SESSION_LIFETIME_HOURS", "24")))
    SESSION_SWEEP_INTERVAL = timedelta(minutes=int(os.getenv("SESSION_SWEEP_MINUTES", "60")))

    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "5000"))


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing-secret"
    LOG_LEVEL = "WARNING"
