"""Configuration and constants for the Movie Trailer Bot."""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

from errors import FatalConfig

load_dotenv()

# Logging configuration
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=os.getenv("LOG_LEVEL", "INFO").upper()
)
# httpx logs full request URLs, which carry the TMDb api_key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger("movie_bot")


def require_env(*names: str) -> str:
    """Return the first non-empty variable among names, or raise FatalConfig."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    raise FatalConfig(f"{names[0]} not set in environment variables")


def env_float(name: str, default: Optional[float]) -> Optional[float]:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise FatalConfig(f"{name} must be a number, got {value!r}")


def env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise FatalConfig(f"{name} must be a number, got {value!r}")


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# TMDb API configuration
TMDB_API_KEY = require_env("TMDB_API_KEY")
TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="

# Telegram Bot configuration
TELEGRAM_BOT_TOKEN = require_env("TELEGRAM_BOT_TOKEN", "TELEGRAM_TOKEN")

# Health endpoint; disabled unless PORT is set
HEALTH_HOST = os.getenv("HOST", "0.0.0.0")
HEALTH_PORT = env_int("PORT", None)

# Genre mapping for TMDb, keyed by canonical name
GENRE_MAP = {
    "action": 28,
    "comedy": 35,
    "drama": 18,
    "horror": 27,
    "romance": 10749,
    "scifi": 878,
}

# Extra spellings, keyed by normalized form
GENRE_ALIASES = {
    "sciencefiction": "scifi",
    "romantic": "romance",
}

# Pagination
PAGE_SIZE = 5

# Caption overview budgets (characters)
RECOMMEND_OVERVIEW_LIMIT = 300
TRAILER_OVERVIEW_LIMIT = 400

# Timeouts (in seconds)
TMDB_TIMEOUT = env_float("TMDB_TIMEOUT", 10.0)

# Sessions idle longer than this are dropped; None keeps them for the process lifetime
SESSION_IDLE_TIMEOUT = env_float("SESSION_IDLE_TIMEOUT", None)

# Reply to unrecognized commands with a pointer to /start instead of ignoring them
UNKNOWN_COMMAND_HINT = env_flag("UNKNOWN_COMMAND_HINT")
