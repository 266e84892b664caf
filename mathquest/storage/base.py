"""
Storage port.

Every route talks to persisted rows through this interface. Two adapters
implement it: SqlStorage (SQLAlchemy session, production) and MemoryStorage
(plain dicts, tests). Both hand back instances of the ORM model classes so
callers never care which one they got.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Iterable, Optional

from mathquest.auth.models import User, SecurityQuestion
from mathquest.problems.models import Problem
from mathquest.progress.models import Progress
from mathquest.achievements.models import Achievement
from mathquest.daily_puzzle.models import DailyPuzzle, DailyPuzzleAttempt
from mathquest.core.security import HashedSecret


class Storage(ABC):

    # ---------------------------------------------------------------------------
    # Users
    # ---------------------------------------------------------------------------

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def list_users(self) -> list[User]: ...

    @abstractmethod
    def create_user(
        self,
        username: str,
        password_hash: str,
        name: Optional[str] = None,
        grade: Optional[int] = None,
        role: str = "user",
    ) -> User:
        """Insert a user. Raises ConflictError when the username is taken."""

    @abstractmethod
    def update_user(self, user_id: int, **fields) -> User:
        """Set the given columns. Raises NotFoundError for an unknown id."""

    @abstractmethod
    def delete_user(self, user_id: int) -> bool:
        """Delete the user and every row that belongs to it. False if unknown."""

    @abstractmethod
    def get_security_questions(self, user_id: int) -> list[SecurityQuestion]: ...

    @abstractmethod
    def replace_security_questions(
        self, user_id: int, entries: Iterable[tuple[str, HashedSecret]]
    ) -> list[SecurityQuestion]: ...

    # ---------------------------------------------------------------------------
    # Problems
    # ---------------------------------------------------------------------------

    @abstractmethod
    def list_problems(
        self, grade: int, type: Optional[str] = None, limit: Optional[int] = None
    ) -> list[Problem]: ...

    @abstractmethod
    def get_problem(self, problem_id: int) -> Optional[Problem]: ...

    @abstractmethod
    def create_problems(self, problems: Iterable[dict]) -> list[Problem]: ...

    @abstractmethod
    def delete_all_problems(self) -> int: ...

    @abstractmethod
    def count_problems(self) -> int: ...

    # ---------------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------------

    @abstractmethod
    def list_progress(self, user_id: int) -> list[Progress]: ...

    @abstractmethod
    def get_progress(self, user_id: int, problem_id: int) -> Optional[Progress]: ...

    @abstractmethod
    def save_progress(
        self,
        user_id: int,
        problem_id: int,
        completed: bool,
        attempts: int,
        last_attempt: datetime,
    ) -> Progress:
        """Create or overwrite the (user, problem) row."""

    @abstractmethod
    def count_completed_problems(self, user_id: int) -> int: ...

    # ---------------------------------------------------------------------------
    # Achievements
    # ---------------------------------------------------------------------------

    @abstractmethod
    def list_achievements(self, user_id: int) -> list[Achievement]: ...

    @abstractmethod
    def add_achievement(self, user_id: int, **fields) -> Achievement: ...

    @abstractmethod
    def update_achievement_progress(self, achievement_id: int, progress: int) -> Achievement: ...

    # ---------------------------------------------------------------------------
    # Daily puzzles
    # ---------------------------------------------------------------------------

    @abstractmethod
    def find_daily_puzzle(self, start: date, end: date) -> Optional[DailyPuzzle]:
        """First puzzle with start <= puzzle_date < end."""

    @abstractmethod
    def create_daily_puzzle(self, **fields) -> DailyPuzzle:
        """Insert the puzzle for fields["puzzle_date"], or return the one already stored for that date."""

    @abstractmethod
    def get_puzzle_attempt(self, user_id: int, puzzle_id: int) -> Optional[DailyPuzzleAttempt]: ...

    @abstractmethod
    def save_puzzle_attempt(
        self,
        user_id: int,
        puzzle_id: int,
        attempts: int,
        solved: bool,
        attempt_date: datetime,
        solved_at: Optional[datetime] = None,
    ) -> DailyPuzzleAttempt: ...

    @abstractmethod
    def count_solved_puzzles(self, user_id: int) -> int: ...
