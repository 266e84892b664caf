"""
Achievement system.
Awards come from a fixed catalog, each at most once per user (UNIQUE user_id+type).
Evaluation reads the user's current totals and persists whatever is newly met.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from mathquest.achievements.models import Achievement
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementCriterion:
    type: str
    title: str
    description: str
    icon: str
    category: str
    metric: str  # completed_problems | daily_puzzles | score
    target: int


CATALOG = (
    AchievementCriterion("first_problem", "First Steps", "Solved your first problem",
                         "🏆", "practice", "completed_problems", 1),
    AchievementCriterion("problem_solver", "Problem Solver", "Solved 10 problems",
                         "⭐", "practice", "completed_problems", 10),
    AchievementCriterion("math_champion", "Math Champion", "Solved 50 problems",
                         "🥇", "practice", "completed_problems", 50),
    AchievementCriterion("puzzle_starter", "Puzzle Starter", "Solved your first daily puzzle",
                         "🧩", "daily", "daily_puzzles", 1),
    AchievementCriterion("puzzle_pro", "Puzzle Pro", "Solved 5 daily puzzles",
                         "🔥", "daily", "daily_puzzles", 5),
    AchievementCriterion("century_club", "Century Club", "Scored 100 points",
                         "💯", "score", "score", 100),
)


def compute_metrics(storage: Storage, user_id: int) -> dict[str, int]:
    user = storage.get_user(user_id)
    return {
        "completed_problems": storage.count_completed_problems(user_id),
        "daily_puzzles": storage.count_solved_puzzles(user_id),
        "score": (user.score or 0) if user else 0,
    }


def evaluate_achievements(storage: Storage, user_id: int) -> list[Achievement]:
    """Award every catalog entry the user now qualifies for and does not hold yet.

    Returns only the newly created records. Awards are written one at a time,
    so a failure part way through keeps the ones already written.
    """
    metrics = compute_metrics(storage, user_id)
    held = {a.type for a in storage.list_achievements(user_id)}

    awarded = []
    for criterion in CATALOG:
        if criterion.type in held:
            continue
        value = metrics[criterion.metric]
        if value < criterion.target:
            continue
        awarded.append(storage.add_achievement(
            user_id,
            type=criterion.type,
            title=criterion.title,
            description=criterion.description,
            icon=criterion.icon,
            category=criterion.category,
            progress=min(value, criterion.target),
            target=criterion.target,
            earned_at=datetime.now(timezone.utc),
        ))
        logger.info("[ACHIEVEMENT] user=%s earned '%s'", user_id, criterion.type)
    return awarded


def achievement_overview(storage: Storage, user_id: int) -> list[dict]:
    """The whole catalog with earned flag and current progress for display."""
    metrics = compute_metrics(storage, user_id)
    earned = {a.type: a for a in storage.list_achievements(user_id)}
    result = []
    for criterion in CATALOG:
        row = earned.get(criterion.type)
        result.append({
            "type": criterion.type,
            "title": criterion.title,
            "description": criterion.description,
            "icon": criterion.icon,
            "category": criterion.category,
            "progress": min(metrics[criterion.metric], criterion.target),
            "target": criterion.target,
            "earned": row is not None,
            "earned_at": row.earned_at if row else None,
        })
    return result
