"""
Configuration constants for the application.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


# Main Admin User ID
# The user with this ID always has admin authority, whatever its role column says.
MAIN_ADMIN_USER_ID = _env_int("MAIN_ADMIN_USER_ID", 1)

# Scoring
POINTS_PER_DIFFICULTY = _env_int("POINTS_PER_DIFFICULTY", 10)
POINTS_PER_LEVEL = _env_int("POINTS_PER_LEVEL", 100)

# Daily puzzle
DAILY_PUZZLE_REWARD = _env_int("DAILY_PUZZLE_REWARD", 10)
DAILY_PUZZLE_GRADE = _env_int("DAILY_PUZZLE_GRADE", 4)

# Problem bank
PROBLEMS_PER_CATEGORY = _env_int("PROBLEMS_PER_CATEGORY", 5)
SEED_PROBLEMS_ON_STARTUP = _env_flag("SEED_PROBLEMS_ON_STARTUP", True)

# Session cookie
COOKIE_SECURE = _env_flag("COOKIE_SECURE", False)

ENABLE_DEBUG_ROUTES = _env_flag("ENABLE_DEBUG_ROUTES", False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    """Attach a single console handler to the package logger."""
    logger = logging.getLogger("mathquest")
    logger.setLevel(LOG_LEVEL)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: [%(name)s] %(message)s"))
        logger.addHandler(handler)
