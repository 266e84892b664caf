from datetime import datetime
from typing import Optional

from mathquest.core.schemas import ApiModel


class AchievementOut(ApiModel):
    id: int
    user_id: int
    type: str
    title: str
    description: str
    icon: str
    category: str
    progress: int
    target: int
    earned_at: datetime


class AchievementStatusOut(ApiModel):
    type: str
    title: str
    description: str
    icon: str
    category: str
    progress: int
    target: int
    earned: bool
    earned_at: Optional[datetime] = None
