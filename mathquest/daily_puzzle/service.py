"""
Daily puzzle: one featured word problem per calendar date, created on first
request, with a point reward paid at most once per user.
"""
import logging
import random
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from mathquest.auth.models import User
from mathquest.auth.scoring import award_points
from mathquest.core.config import DAILY_PUZZLE_GRADE, DAILY_PUZZLE_REWARD
from mathquest.daily_puzzle.models import DailyPuzzle
from mathquest.problems import word_problems
from mathquest.problems.answers import check_answer, to_number
from mathquest.problems.generator import near_miss_distractors
from mathquest.storage.base import Storage

logger = logging.getLogger(__name__)

KIND_TITLES = {
    "multiplication": "Equal Groups",
    "division": "Fair Shares",
    "subtraction": "What's Left?",
    "decimal": "Money Matters",
    "multi_step": "Step by Step",
}


def today() -> date:
    return datetime.now(timezone.utc).date()


def _options_for(answer: str) -> list[str]:
    """Correct answer plus three close numeric distractors, shuffled."""
    value = to_number(answer)
    if value is None:
        return [answer]
    if "." in answer:
        # Money: offsets in whole cents
        cents = int(value * 100)
        options = [f"{c / 100:.2f}" for c in near_miss_distractors(cents, max_offset=20)]
    else:
        options = [str(v) for v in near_miss_distractors(int(value))]
    options.append(answer)
    random.shuffle(options)
    return options


def build_daily_puzzle(day: date, grade: int = DAILY_PUZZLE_GRADE) -> dict:
    scenario = word_problems.pick_scenario(grade)
    problem = word_problems.build(scenario, grade)
    return {
        "puzzle_date": day,
        "title": f"Daily Puzzle: {KIND_TITLES[scenario.kind]}",
        "scenario": scenario.context,
        "question": problem["question"],
        "grade": grade,
        "answer": problem["answer"],
        "explanation": problem["explanation"],
        "options": _options_for(problem["answer"]),
        "difficulty": problem["difficulty"],
        "category": scenario.kind,
        "real_world_context": scenario.context,
        "visual_aid": None,
        "reward": DAILY_PUZZLE_REWARD,
    }


def get_puzzle_for(storage: Storage, day: date) -> Optional[DailyPuzzle]:
    return storage.find_daily_puzzle(day, day + timedelta(days=1))


def get_or_create_daily_puzzle(storage: Storage, day: Optional[date] = None) -> DailyPuzzle:
    day = day or today()
    puzzle = get_puzzle_for(storage, day)
    if puzzle:
        return puzzle
    puzzle = storage.create_daily_puzzle(**build_daily_puzzle(day))
    logger.info("[PUZZLE] created daily puzzle id=%s for %s", puzzle.id, day.isoformat())
    return puzzle


def solve_daily_puzzle(storage: Storage, user: User, answer: str, day: Optional[date] = None) -> dict:
    """
    Record an attempt on the day's puzzle. The reward is paid on the first
    correct answer only; later attempts, right or wrong, pay nothing.
    """
    puzzle = get_or_create_daily_puzzle(storage, day)
    attempt = storage.get_puzzle_attempt(user.id, puzzle.id)
    already_solved = bool(attempt and attempt.solved)
    correct = check_answer(puzzle.answer, answer)
    now = datetime.now(timezone.utc)

    attempt = storage.save_puzzle_attempt(
        user_id=user.id,
        puzzle_id=puzzle.id,
        attempts=(attempt.attempts if attempt else 0) + 1,
        solved=already_solved or correct,
        attempt_date=now,
        solved_at=attempt.solved_at if already_solved else (now if correct else None),
    )

    points = 0
    if correct and not already_solved:
        points = puzzle.reward
        user = award_points(storage, user, points)
        logger.info("[PUZZLE] user=%s solved puzzle=%s (+%d)", user.id, puzzle.id, points)

    return {
        "puzzle": puzzle,
        "attempt": attempt,
        "correct": correct,
        "already_solved": already_solved,
        "points_awarded": points,
        "user": user,
    }
