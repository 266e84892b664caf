import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from mathquest.core.config import ENABLE_DEBUG_ROUTES, SEED_PROBLEMS_ON_STARTUP, configure_logging

configure_logging()

from mathquest.db.base import Base, SessionLocal, engine, log_database_diagnostics
from mathquest.core.errors import register_exception_handlers
# Model imports so create_all picks every table up
from mathquest.auth.models import User, SecurityQuestion  # noqa: F401
from mathquest.problems.models import Problem  # noqa: F401
from mathquest.progress.models import Progress  # noqa: F401
from mathquest.achievements.models import Achievement  # noqa: F401
from mathquest.daily_puzzle.models import DailyPuzzle, DailyPuzzleAttempt  # noqa: F401
from mathquest.problems.bank import seed_problem_bank_if_empty
from mathquest.storage.sql import SqlStorage

from mathquest.auth.routes import router as auth_router
from mathquest.users.routes import router as users_router
from mathquest.problems.routes import router as problems_router
from mathquest.progress.routes import router as progress_router
from mathquest.achievements.routes import router as achievements_router
from mathquest.daily_puzzle.routes import router as daily_puzzle_router
from mathquest.cards.routes import router as cards_router
from mathquest.web.debug_routes import router as debug_router

logger = logging.getLogger(__name__)

app = FastAPI(title="MathQuest", version="0.1.0")

register_exception_handlers(app)

# Only expose debug routes (including diagnostics) when explicitly enabled.
if ENABLE_DEBUG_ROUTES:
    app.include_router(debug_router)

log_database_diagnostics()

# Create database tables (still useful in dev; in production prefer Alembic)
Base.metadata.create_all(bind=engine)

# Fill an empty problem bank so a fresh install has something to practice
if SEED_PROBLEMS_ON_STARTUP:
    _db = SessionLocal()
    try:
        seed_problem_bank_if_empty(SqlStorage(_db))
    except Exception as e:
        _db.rollback()
        logger.warning("[BANK] startup seeding failed: %r", e)
    finally:
        _db.close()

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(problems_router)
app.include_router(progress_router)
app.include_router(achievements_router)
app.include_router(daily_puzzle_router)
app.include_router(cards_router)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}
