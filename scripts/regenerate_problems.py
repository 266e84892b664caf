"""
Rebuild the problem bank from the generators.

Usage:
    python scripts/regenerate_problems.py [count_per_category]

Every existing problem is deleted first, so old problem ids stop resolving.
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mathquest.core.config import PROBLEMS_PER_CATEGORY, configure_logging
from mathquest.db.base import Base, engine
from mathquest.db.session import SessionLocal
from mathquest.problems.bank import regenerate_problem_bank
from mathquest.problems.models import Problem  # noqa: F401
from mathquest.storage.sql import SqlStorage


def main(count_per_category: int) -> int:
    configure_logging()
    Base.metadata.create_all(bind=engine, tables=[Problem.__table__])

    db = SessionLocal()
    try:
        created = regenerate_problem_bank(SqlStorage(db), count_per_category)
        print(f"Created {created} problems ({count_per_category} per grade and category).")
        return 0
    except Exception as e:
        db.rollback()
        print(f"ERROR: Failed to regenerate problems: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else PROBLEMS_PER_CATEGORY
    sys.exit(main(count))
