import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from mathquest.achievements.evaluator import evaluate_achievements
from mathquest.achievements.schemas import AchievementOut
from mathquest.auth.models import User
from mathquest.auth.scoring import award_points
from mathquest.core.config import POINTS_PER_DIFFICULTY
from mathquest.core.deps import get_current_user, get_storage, is_admin
from mathquest.core.errors import ForbiddenError, NotFoundError, ValidationError
from mathquest.problems.answers import check_answer
from mathquest.progress.schemas import AttemptResultOut, ProgressIn, ProgressOut
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])


def safe_evaluate_achievements(storage: Storage, user_id: int) -> list:
    """
    Achievement evaluation after a score change.
    The score write has already happened; a failure here is logged and the
    caller carries on with no new achievements.
    """
    try:
        return evaluate_achievements(storage, user_id)
    except Exception:
        logger.exception("[ACHIEVEMENT] evaluation failed for user=%s", user_id)
        return []


@router.get("", response_model=list[ProgressOut])
def my_progress(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.list_progress(user.id)


@router.get("/{user_id}", response_model=list[ProgressOut])
def user_progress(
    user_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if user_id != user.id and not is_admin(user):
        raise ForbiddenError("You can only view your own progress")
    return storage.list_progress(user_id)


@router.post("", response_model=AttemptResultOut)
def record_attempt(
    payload: ProgressIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if payload.answer is None and payload.completed is None:
        raise ValidationError("Provide an answer or a completed flag")

    problem = storage.get_problem(payload.problem_id)
    if not problem:
        raise NotFoundError("Problem not found")

    if payload.answer is not None:
        correct = check_answer(problem.answer, payload.answer)
    else:
        correct = bool(payload.completed)

    existing = storage.get_progress(user.id, problem.id)
    already_completed = bool(existing and existing.completed)

    progress = storage.save_progress(
        user_id=user.id,
        problem_id=problem.id,
        completed=already_completed or correct,
        attempts=(existing.attempts if existing else 0) + 1,
        last_attempt=datetime.now(timezone.utc),
    )

    points = 0
    new_achievements = []
    if correct and not already_completed:
        points = problem.difficulty * POINTS_PER_DIFFICULTY
        user = award_points(storage, user, points)
        new_achievements = safe_evaluate_achievements(storage, user.id)

    return AttemptResultOut(
        progress=ProgressOut.model_validate(progress),
        correct=correct,
        points_awarded=points,
        score=user.score,
        level=user.level,
        new_achievements=[AchievementOut.model_validate(a) for a in new_achievements],
    )
