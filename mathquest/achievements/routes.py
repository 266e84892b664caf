from fastapi import APIRouter, Depends

from mathquest.achievements.evaluator import achievement_overview, evaluate_achievements
from mathquest.achievements.schemas import AchievementOut, AchievementStatusOut
from mathquest.auth.models import User
from mathquest.core.deps import get_current_user, get_storage
from mathquest.core.errors import NotFoundError
from mathquest.storage.base import Storage

router = APIRouter(prefix="/api/achievements", tags=["achievements"])


@router.get("", response_model=list[AchievementStatusOut])
def my_achievements(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Whole catalog for the current user, earned or not."""
    return achievement_overview(storage, user.id)


@router.post("/check", response_model=list[AchievementOut])
def check_achievements(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return evaluate_achievements(storage, user.id)


@router.get("/{user_id}", response_model=list[AchievementOut])
def user_achievements(
    user_id: int,
    storage: Storage = Depends(get_storage),
):
    if not storage.get_user(user_id):
        raise NotFoundError("User not found")
    return storage.list_achievements(user_id)
