from typing import Optional

from fastapi import APIRouter, Depends, Query

from mathquest.auth.models import User
from mathquest.core.config import PROBLEMS_PER_CATEGORY
from mathquest.core.deps import get_admin, get_storage
from mathquest.core.errors import NotFoundError, ValidationError
from mathquest.problems.answers import check_answer
from mathquest.problems.bank import regenerate_problem_bank
from mathquest.problems.generator import CATEGORIES
from mathquest.problems.schemas import AnswerCheckOut, AnswerIn, ProblemOut, RegenerateIn, RegenerateOut
from mathquest.storage.base import Storage

router = APIRouter(prefix="/api/problems", tags=["problems"])

MAX_REGENERATE_PER_CATEGORY = 50


@router.get("", response_model=list[ProblemOut])
def list_problems(
    grade: int = Query(..., ge=3, le=5),
    type: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    storage: Storage = Depends(get_storage),
):
    if type and type not in CATEGORIES:
        raise ValidationError(f"Unknown problem type: {type}")
    return storage.list_problems(grade, type=type, limit=limit)


@router.post("/regenerate", response_model=RegenerateOut)
def regenerate(
    payload: Optional[RegenerateIn] = None,
    admin: User = Depends(get_admin),
    storage: Storage = Depends(get_storage),
):
    count = (payload.count_per_category if payload else None) or PROBLEMS_PER_CATEGORY
    if not 1 <= count <= MAX_REGENERATE_PER_CATEGORY:
        raise ValidationError(f"countPerCategory must be between 1 and {MAX_REGENERATE_PER_CATEGORY}")
    return RegenerateOut(created=regenerate_problem_bank(storage, count))


@router.get("/{problem_id}", response_model=ProblemOut)
def get_problem(
    problem_id: int,
    storage: Storage = Depends(get_storage),
):
    problem = storage.get_problem(problem_id)
    if not problem:
        raise NotFoundError("Problem not found")
    return problem


@router.post("/{problem_id}/check", response_model=AnswerCheckOut)
def check_problem_answer(
    problem_id: int,
    payload: AnswerIn,
    storage: Storage = Depends(get_storage),
):
    problem = storage.get_problem(problem_id)
    if not problem:
        raise NotFoundError("Problem not found")
    return AnswerCheckOut(
        correct=check_answer(problem.answer, payload.answer),
        explanation=problem.explanation,
        hint=problem.hint,
    )
