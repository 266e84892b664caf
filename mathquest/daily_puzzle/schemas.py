from datetime import date, datetime
from typing import Optional

from pydantic import Field

from mathquest.achievements.schemas import AchievementOut
from mathquest.auth.schemas import UserOut
from mathquest.core.schemas import ApiModel
from mathquest.problems.answers import MAX_ANSWER_LENGTH


class DailyPuzzleOut(ApiModel):
    id: int
    puzzle_date: date
    title: str
    scenario: str
    question: str
    grade: int
    options: Optional[list[str]] = None
    difficulty: int
    category: str
    real_world_context: str
    visual_aid: Optional[str] = None
    reward: int
    # Only filled in once the current user has solved the puzzle
    answer: Optional[str] = None
    explanation: Optional[str] = None


class SolveIn(ApiModel):
    answer: str = Field(max_length=MAX_ANSWER_LENGTH)


class SolveOut(ApiModel):
    correct: bool
    already_solved: bool
    points_awarded: int
    attempts: int
    message: str
    explanation: Optional[str] = None
    user: UserOut
    new_achievements: list[AchievementOut]


class PuzzleStatusOut(ApiModel):
    puzzle_id: int
    puzzle_date: date
    solved: bool
    attempts: int
    solved_at: Optional[datetime] = None
