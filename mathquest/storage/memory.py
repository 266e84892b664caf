from datetime import date, datetime, timezone
from itertools import count
from typing import Iterable, Optional

from mathquest.auth.models import User, SecurityQuestion
from mathquest.problems.models import Problem
from mathquest.progress.models import Progress
from mathquest.achievements.models import Achievement
from mathquest.daily_puzzle.models import DailyPuzzle, DailyPuzzleAttempt
from mathquest.core.errors import ConflictError, NotFoundError
from mathquest.core.security import HashedSecret
from mathquest.storage.base import Storage


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """
    Dict-backed adapter for tests and local experiments.
    Rows are transient ORM instances that never touch a session.
    """

    def __init__(self):
        self.users: dict[int, User] = {}
        self.security_questions: dict[int, list[SecurityQuestion]] = {}
        self.problems: dict[int, Problem] = {}
        self.progress: dict[tuple[int, int], Progress] = {}
        self.achievements: dict[int, Achievement] = {}
        self.daily_puzzles: dict[int, DailyPuzzle] = {}
        self.puzzle_attempts: dict[tuple[int, int], DailyPuzzleAttempt] = {}
        self._ids = {
            name: count(1)
            for name in ("users", "security_questions", "problems", "progress",
                         "achievements", "daily_puzzles", "puzzle_attempts")
        }

    def _next_id(self, table: str) -> int:
        return next(self._ids[table])

    # ---------------------------------------------------------------------------
    # Users
    # ---------------------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def list_users(self) -> list[User]:
        return sorted(self.users.values(), key=lambda u: u.id)

    def create_user(self, username, password_hash, name=None, grade=None, role="user") -> User:
        if self.get_user_by_username(username):
            raise ConflictError("Username already exists")
        user = User(
            id=self._next_id("users"),
            username=username,
            password_hash=password_hash,
            name=name,
            grade=grade,
            score=0,
            level=1,
            role=role,
            created_at=_now(),
            last_active=None,
        )
        self.users[user.id] = user
        return user

    def update_user(self, user_id: int, **fields) -> User:
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        for key, value in fields.items():
            setattr(user, key, value)
        return user

    def delete_user(self, user_id: int) -> bool:
        if user_id not in self.users:
            return False
        del self.users[user_id]
        self.security_questions.pop(user_id, None)
        self.progress = {k: v for k, v in self.progress.items() if k[0] != user_id}
        self.achievements = {k: v for k, v in self.achievements.items() if v.user_id != user_id}
        self.puzzle_attempts = {k: v for k, v in self.puzzle_attempts.items() if k[0] != user_id}
        return True

    def get_security_questions(self, user_id: int) -> list[SecurityQuestion]:
        return list(self.security_questions.get(user_id, []))

    def replace_security_questions(
        self, user_id: int, entries: Iterable[tuple[str, HashedSecret]]
    ) -> list[SecurityQuestion]:
        rows = [
            SecurityQuestion(
                id=self._next_id("security_questions"),
                user_id=user_id,
                position=position,
                question=question,
                answer_hash=hashed.digest,
                answer_salt=hashed.salt,
            )
            for position, (question, hashed) in enumerate(entries)
        ]
        self.security_questions[user_id] = rows
        return list(rows)

    # ---------------------------------------------------------------------------
    # Problems
    # ---------------------------------------------------------------------------

    def list_problems(self, grade: int, type: Optional[str] = None, limit: Optional[int] = None) -> list[Problem]:
        rows = [
            p for p in sorted(self.problems.values(), key=lambda p: p.id)
            if p.grade == grade and (not type or p.type == type)
        ]
        return rows[:limit] if limit else rows

    def get_problem(self, problem_id: int) -> Optional[Problem]:
        return self.problems.get(problem_id)

    def create_problems(self, problems: Iterable[dict]) -> list[Problem]:
        rows = []
        for fields in problems:
            row = Problem(id=self._next_id("problems"), created_at=_now(), **fields)
            self.problems[row.id] = row
            rows.append(row)
        return rows

    def delete_all_problems(self) -> int:
        deleted = len(self.problems)
        self.problems.clear()
        return deleted

    def count_problems(self) -> int:
        return len(self.problems)

    # ---------------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------------

    def list_progress(self, user_id: int) -> list[Progress]:
        return sorted(
            (p for p in self.progress.values() if p.user_id == user_id),
            key=lambda p: p.id,
        )

    def get_progress(self, user_id: int, problem_id: int) -> Optional[Progress]:
        return self.progress.get((user_id, problem_id))

    def save_progress(self, user_id, problem_id, completed, attempts, last_attempt) -> Progress:
        row = self.progress.get((user_id, problem_id))
        if not row:
            row = Progress(id=self._next_id("progress"), user_id=user_id, problem_id=problem_id)
            self.progress[(user_id, problem_id)] = row
        row.completed = completed
        row.attempts = attempts
        row.last_attempt = last_attempt
        return row

    def count_completed_problems(self, user_id: int) -> int:
        return len({p.problem_id for p in self.progress.values() if p.user_id == user_id and p.completed})

    # ---------------------------------------------------------------------------
    # Achievements
    # ---------------------------------------------------------------------------

    def list_achievements(self, user_id: int) -> list[Achievement]:
        return sorted(
            (a for a in self.achievements.values() if a.user_id == user_id),
            key=lambda a: a.id,
        )

    def add_achievement(self, user_id: int, **fields) -> Achievement:
        achievement = Achievement(id=self._next_id("achievements"), user_id=user_id, **fields)
        self.achievements[achievement.id] = achievement
        return achievement

    def update_achievement_progress(self, achievement_id: int, progress: int) -> Achievement:
        achievement = self.achievements.get(achievement_id)
        if not achievement:
            raise NotFoundError("Achievement not found")
        achievement.progress = progress
        return achievement

    # ---------------------------------------------------------------------------
    # Daily puzzles
    # ---------------------------------------------------------------------------

    def find_daily_puzzle(self, start: date, end: date) -> Optional[DailyPuzzle]:
        matches = [p for p in self.daily_puzzles.values() if start <= p.puzzle_date < end]
        return min(matches, key=lambda p: p.puzzle_date) if matches else None

    def create_daily_puzzle(self, **fields) -> DailyPuzzle:
        existing = next(
            (p for p in self.daily_puzzles.values() if p.puzzle_date == fields["puzzle_date"]), None
        )
        if existing:
            return existing
        puzzle = DailyPuzzle(id=self._next_id("daily_puzzles"), **fields)
        self.daily_puzzles[puzzle.id] = puzzle
        return puzzle

    def get_puzzle_attempt(self, user_id: int, puzzle_id: int) -> Optional[DailyPuzzleAttempt]:
        return self.puzzle_attempts.get((user_id, puzzle_id))

    def save_puzzle_attempt(self, user_id, puzzle_id, attempts, solved, attempt_date, solved_at=None) -> DailyPuzzleAttempt:
        row = self.puzzle_attempts.get((user_id, puzzle_id))
        if not row:
            row = DailyPuzzleAttempt(id=self._next_id("puzzle_attempts"), user_id=user_id, puzzle_id=puzzle_id)
            self.puzzle_attempts[(user_id, puzzle_id)] = row
        row.attempts = attempts
        row.solved = solved
        row.attempt_date = attempt_date
        row.solved_at = solved_at
        return row

    def count_solved_puzzles(self, user_id: int) -> int:
        return sum(1 for a in self.puzzle_attempts.values() if a.user_id == user_id and a.solved)
