from typing import Optional

from pydantic import Field

from mathquest.core.schemas import ApiModel
from mathquest.problems.answers import MAX_ANSWER_LENGTH


class ProblemOut(ApiModel):
    id: int
    grade: int
    type: str
    question: str
    answer: str
    explanation: str
    hint: Optional[str] = None
    options: Optional[list[str]] = None
    difficulty: int
    skill_level: Optional[str] = None
    common_mistakes: Optional[list[str]] = None
    required_steps: Optional[list[str]] = None


class AnswerIn(ApiModel):
    answer: str = Field(max_length=MAX_ANSWER_LENGTH)


class AnswerCheckOut(ApiModel):
    correct: bool
    explanation: str
    hint: Optional[str] = None


class RegenerateIn(ApiModel):
    count_per_category: Optional[int] = None


class RegenerateOut(ApiModel):
    created: int
