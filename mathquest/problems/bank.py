"""
Problem bank maintenance.

Regeneration is delete-all-then-reinsert with a freshly randomized set, so
problem ids from before a regeneration stop resolving.
"""
import logging

from mathquest.core.config import PROBLEMS_PER_CATEGORY
from mathquest.problems.generator import CATEGORIES, GRADES, generate_problems
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)


def build_problem_bank(count_per_category: int = PROBLEMS_PER_CATEGORY) -> list[dict]:
    bank = []
    for grade in GRADES:
        for category in CATEGORIES:
            bank.extend(generate_problems(grade, category, count_per_category))
    return bank


def regenerate_problem_bank(storage: Storage, count_per_category: int = PROBLEMS_PER_CATEGORY) -> int:
    """Replace every stored problem with a new random bank. Returns the number inserted."""
    bank = build_problem_bank(count_per_category)
    deleted = storage.delete_all_problems()
    created = storage.create_problems(bank)
    logger.info("[BANK] regenerated problem bank: deleted=%d created=%d", deleted, len(created))
    return len(created)


def seed_problem_bank_if_empty(storage: Storage, count_per_category: int = PROBLEMS_PER_CATEGORY) -> int:
    if storage.count_problems():
        return 0
    created = storage.create_problems(build_problem_bank(count_per_category))
    logger.info("[BANK] seeded empty problem bank with %d problems", len(created))
    return len(created)
