import logging
import os
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)


def _build_database_url() -> str:
    """
    Determine the database URL.

    - Prefer DATABASE_URL from the environment (production).
    - Fallback to a local SQLite file for development.
    - Normalize legacy postgres:// URLs to SQLAlchemy's postgresql+psycopg2://.
    """
    url = os.getenv("DATABASE_URL", "sqlite:///./local.db").strip()

    if url.startswith("postgres://"):
        # SQLAlchemy 2.x expects a driver-qualified URL
        url = url.replace("postgres://", "postgresql+psycopg2://", 1)

    return url


DATABASE_URL = _build_database_url()

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # Needed for SQLite when used with FastAPI in a single process
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, connect_args=connect_args, future=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def log_database_diagnostics() -> None:
    """Log the active backend once at startup, password hidden."""
    try:
        url_safe = engine.url.render_as_string(hide_password=True)
        backend = engine.url.get_backend_name()
        logger.info("[DB] Using database backend=%s url=%s", backend, url_safe)

        if backend == "sqlite" and engine.url.database not in (None, "", ":memory:"):
            db_path = Path(engine.url.database).resolve()
            exists = db_path.exists()
            size = db_path.stat().st_size if exists else 0
            logger.info("[DB] SQLite path=%s exists=%s size_bytes=%d", db_path, exists, size)
    except Exception as exc:
        # Never crash app on logging
        logger.warning("[DB] Failed to log DB diagnostics: %r", exc)
