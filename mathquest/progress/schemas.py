from datetime import datetime
from typing import Optional

from pydantic import Field

from mathquest.achievements.schemas import AchievementOut
from mathquest.core.schemas import ApiModel
from mathquest.problems.answers import MAX_ANSWER_LENGTH


class ProgressIn(ApiModel):
    problem_id: int
    # Either send the typed answer for the server to check, or a completed flag
    answer: Optional[str] = Field(None, max_length=MAX_ANSWER_LENGTH)
    completed: Optional[bool] = None


class ProgressOut(ApiModel):
    id: int
    user_id: int
    problem_id: int
    completed: bool
    attempts: int
    last_attempt: Optional[datetime] = None


class AttemptResultOut(ApiModel):
    progress: ProgressOut
    correct: bool
    points_awarded: int
    score: int
    level: int
    new_achievements: list[AchievementOut]
