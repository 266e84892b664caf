from pathlib import Path

from fastapi import APIRouter, Depends
from sqlalchemy import inspect

from mathquest.core.deps import get_storage
from mathquest.db.base import Base, engine
from mathquest.problems.generator import GRADES
from mathquest.storage.base import Storage

router = APIRouter(prefix="/debug", tags=["debug"])


@router.get("/users")
def debug_users(storage: Storage = Depends(get_storage)):
    return [
        {
            "id": u.id,
            "username": u.username,
            "grade": u.grade,
            "score": u.score,
            "level": u.level,
            "role": u.role,
            "created_at": str(u.created_at or ""),
        }
        for u in storage.list_users()
    ]


@router.get("/problem-bank")
def debug_problem_bank(storage: Storage = Depends(get_storage)):
    """Problem counts per grade and type."""
    summary = {}
    for grade in GRADES:
        counts = {}
        for problem in storage.list_problems(grade):
            counts[problem.type] = counts.get(problem.type, 0) + 1
        summary[str(grade)] = counts
    return {"total": storage.count_problems(), "by_grade": summary}


def _sqlite_file(database: str | None) -> dict:
    # ":memory:" and "" mean no file on disk
    if not database or database == ":memory:":
        return {"sqlite_path": None, "sqlite_exists": False, "sqlite_size_bytes": 0}
    path = Path(database).resolve()
    return {
        "sqlite_path": str(path),
        "sqlite_exists": path.exists(),
        "sqlite_size_bytes": path.stat().st_size if path.exists() else 0,
    }


@router.get("/diagnostics/db")
def db_diagnostics():
    """
    Where the app is storing data and whether the schema is in place.

    Mounted only with ENABLE_DEBUG_ROUTES=1. The URL is rendered with the
    password masked.
    """
    url = engine.url
    expected = sorted(Base.metadata.tables)
    present = set(inspect(engine).get_table_names())

    info = {
        "backend": url.get_backend_name(),
        "driver": url.drivername,
        "url": url.render_as_string(hide_password=True),
        "missing_tables": [name for name in expected if name not in present],
    }
    if info["backend"] == "sqlite":
        info.update(_sqlite_file(url.database))
    else:
        info.update({"database": url.database, "host": url.host, "port": url.port})
    return info
