"""
Score and level bookkeeping.
"""
import logging

from mathquest.auth.models import User
from mathquest.core.config import POINTS_PER_LEVEL
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)


def level_for_score(score: int) -> int:
    return max(score, 0) // POINTS_PER_LEVEL + 1


def award_points(storage: Storage, user: User, points: int) -> User:
    """Add points to the user's score and recompute the derived level."""
    if points <= 0:
        return user
    new_score = (user.score or 0) + points
    old_level = user.level
    updated = storage.update_user(user.id, score=new_score, level=level_for_score(new_score))
    if updated.level != old_level:
        logger.info("[LEVEL-UP] user=%s %s -> %s", user.id, old_level, updated.level)
    return updated
