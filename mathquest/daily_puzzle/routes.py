from fastapi import APIRouter, Depends

from mathquest.achievements.schemas import AchievementOut
from mathquest.auth.models import User
from mathquest.auth.routes import user_out
from mathquest.core.deps import get_current_user, get_optional_user, get_storage
from mathquest.daily_puzzle.schemas import DailyPuzzleOut, PuzzleStatusOut, SolveIn, SolveOut
from mathquest.daily_puzzle.service import get_or_create_daily_puzzle, solve_daily_puzzle
from mathquest.progress.routes import safe_evaluate_achievements
from mathquest.storage.base import Storage

router = APIRouter(prefix="/api/daily-puzzle", tags=["daily-puzzle"])


@router.get("", response_model=DailyPuzzleOut)
def daily_puzzle(
    user=Depends(get_optional_user),
    storage: Storage = Depends(get_storage),
):
    puzzle = get_or_create_daily_puzzle(storage)
    out = DailyPuzzleOut.model_validate(puzzle)
    attempt = storage.get_puzzle_attempt(user.id, puzzle.id) if user else None
    if not (attempt and attempt.solved):
        out.answer = None
        out.explanation = None
    return out


@router.post("/solve", response_model=SolveOut)
def solve(
    payload: SolveIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    result = solve_daily_puzzle(storage, user, payload.answer)
    new_achievements = []
    if result["points_awarded"]:
        new_achievements = safe_evaluate_achievements(storage, user.id)

    if result["already_solved"]:
        message = "You already solved today's puzzle. Come back tomorrow!"
    elif result["correct"]:
        message = "Correct! You've solved today's puzzle!"
    else:
        message = "Not quite right. Try again!"

    solved = result["already_solved"] or result["correct"]
    return SolveOut(
        correct=result["correct"],
        already_solved=result["already_solved"],
        points_awarded=result["points_awarded"],
        attempts=result["attempt"].attempts,
        message=message,
        explanation=result["puzzle"].explanation if solved else None,
        user=user_out(storage, result["user"]),
        new_achievements=[AchievementOut.model_validate(a) for a in new_achievements],
    )


@router.get("/status", response_model=PuzzleStatusOut)
def status(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    puzzle = get_or_create_daily_puzzle(storage)
    attempt = storage.get_puzzle_attempt(user.id, puzzle.id)
    return PuzzleStatusOut(
        puzzle_id=puzzle.id,
        puzzle_date=puzzle.puzzle_date,
        solved=bool(attempt and attempt.solved),
        attempts=attempt.attempts if attempt else 0,
        solved_at=attempt.solved_at if attempt else None,
    )
