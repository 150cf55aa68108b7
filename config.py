import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "cybersnake2025")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///cyber_snake.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Optional engine options for better PostgreSQL behavior under concurrency
    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 5))
    DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 10))
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
    }

    APP_HOST = os.getenv("HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("PORT", 3000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DEFAULT_EVENT_NAME = os.getenv("DEFAULT_EVENT_NAME", "Event 1")

    # Deltas used when replaying the answer log (CSV export)
    SCORE_CORRECT_DELTA = 5
    SCORE_WRONG_DELTA = -2


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    # In-memory SQLite runs on a static pool, which rejects pool sizing
    SQLALCHEMY_ENGINE_OPTIONS = {}
