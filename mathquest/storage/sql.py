from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy import func, distinct
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mathquest.auth.models import User, SecurityQuestion
from mathquest.problems.models import Problem
from mathquest.progress.models import Progress
from mathquest.achievements.models import Achievement
from mathquest.daily_puzzle.models import DailyPuzzle, DailyPuzzleAttempt
from mathquest.core.errors import ConflictError, NotFoundError
from mathquest.core.security import HashedSecret
from mathquest.storage.base import Storage


class SqlStorage(Storage):
    """Storage adapter over a SQLAlchemy session. Each write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------------------------
    # Users
    # ---------------------------------------------------------------------------

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id.asc()).all()

    def create_user(self, username, password_hash, name=None, grade=None, role="user") -> User:
        user = User(
            username=username,
            password_hash=password_hash,
            name=name,
            grade=grade,
            score=0,
            level=1,
            role=role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            self.db.rollback()
            raise ConflictError("Username already exists")
        self.db.refresh(user)
        return user

    def update_user(self, user_id: int, **fields) -> User:
        user = self.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> bool:
        user = self.get_user(user_id)
        if not user:
            return False
        for model in (SecurityQuestion, Progress, Achievement, DailyPuzzleAttempt):
            self.db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)
        self.db.delete(user)
        self.db.commit()
        return True

    def get_security_questions(self, user_id: int) -> list[SecurityQuestion]:
        return (
            self.db.query(SecurityQuestion)
            .filter(SecurityQuestion.user_id == user_id)
            .order_by(SecurityQuestion.position.asc())
            .all()
        )

    def replace_security_questions(
        self, user_id: int, entries: Iterable[tuple[str, HashedSecret]]
    ) -> list[SecurityQuestion]:
        self.db.query(SecurityQuestion).filter(
            SecurityQuestion.user_id == user_id
        ).delete(synchronize_session=False)
        # Flush the delete first so re-picking the same question does not trip the unique constraint
        self.db.flush()
        for position, (question, hashed) in enumerate(entries):
            self.db.add(SecurityQuestion(
                user_id=user_id,
                position=position,
                question=question,
                answer_hash=hashed.digest,
                answer_salt=hashed.salt,
            ))
        self.db.commit()
        return self.get_security_questions(user_id)

    # ---------------------------------------------------------------------------
    # Problems
    # ---------------------------------------------------------------------------

    def list_problems(self, grade: int, type: Optional[str] = None, limit: Optional[int] = None) -> list[Problem]:
        query = self.db.query(Problem).filter(Problem.grade == grade)
        if type:
            query = query.filter(Problem.type == type)
        query = query.order_by(Problem.id.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_problem(self, problem_id: int) -> Optional[Problem]:
        return self.db.query(Problem).filter(Problem.id == problem_id).first()

    def create_problems(self, problems: Iterable[dict]) -> list[Problem]:
        rows = [Problem(**fields) for fields in problems]
        self.db.add_all(rows)
        self.db.commit()
        for row in rows:
            self.db.refresh(row)
        return rows

    def delete_all_problems(self) -> int:
        deleted = self.db.query(Problem).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def count_problems(self) -> int:
        return self.db.query(func.count(Problem.id)).scalar() or 0

    # ---------------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------------

    def list_progress(self, user_id: int) -> list[Progress]:
        return (
            self.db.query(Progress)
            .filter(Progress.user_id == user_id)
            .order_by(Progress.id.asc())
            .all()
        )

    def get_progress(self, user_id: int, problem_id: int) -> Optional[Progress]:
        return self.db.query(Progress).filter(
            Progress.user_id == user_id,
            Progress.problem_id == problem_id,
        ).first()

    def save_progress(self, user_id, problem_id, completed, attempts, last_attempt) -> Progress:
        row = self.get_progress(user_id, problem_id)
        if not row:
            row = Progress(user_id=user_id, problem_id=problem_id)
            self.db.add(row)
        row.completed = completed
        row.attempts = attempts
        row.last_attempt = last_attempt
        self.db.commit()
        self.db.refresh(row)
        return row

    def count_completed_problems(self, user_id: int) -> int:
        return (
            self.db.query(func.count(distinct(Progress.problem_id)))
            .filter(Progress.user_id == user_id, Progress.completed.is_(True))
            .scalar()
        ) or 0

    # ---------------------------------------------------------------------------
    # Achievements
    # ---------------------------------------------------------------------------

    def list_achievements(self, user_id: int) -> list[Achievement]:
        return (
            self.db.query(Achievement)
            .filter(Achievement.user_id == user_id)
            .order_by(Achievement.earned_at.asc(), Achievement.id.asc())
            .all()
        )

    def add_achievement(self, user_id: int, **fields) -> Achievement:
        achievement = Achievement(user_id=user_id, **fields)
        self.db.add(achievement)
        self.db.commit()
        self.db.refresh(achievement)
        return achievement

    def update_achievement_progress(self, achievement_id: int, progress: int) -> Achievement:
        achievement = self.db.query(Achievement).filter(Achievement.id == achievement_id).first()
        if not achievement:
            raise NotFoundError("Achievement not found")
        achievement.progress = progress
        self.db.commit()
        self.db.refresh(achievement)
        return achievement

    # ---------------------------------------------------------------------------
    # Daily puzzles
    # ---------------------------------------------------------------------------

    def find_daily_puzzle(self, start: date, end: date) -> Optional[DailyPuzzle]:
        return (
            self.db.query(DailyPuzzle)
            .filter(DailyPuzzle.puzzle_date >= start, DailyPuzzle.puzzle_date < end)
            .order_by(DailyPuzzle.puzzle_date.asc())
            .first()
        )

    def create_daily_puzzle(self, **fields) -> DailyPuzzle:
        puzzle = DailyPuzzle(**fields)
        self.db.add(puzzle)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request created this date's puzzle first
            self.db.rollback()
            day = fields["puzzle_date"]
            existing = self.db.query(DailyPuzzle).filter(DailyPuzzle.puzzle_date == day).first()
            if existing is None:
                raise
            return existing
        self.db.refresh(puzzle)
        return puzzle

    def get_puzzle_attempt(self, user_id: int, puzzle_id: int) -> Optional[DailyPuzzleAttempt]:
        return self.db.query(DailyPuzzleAttempt).filter(
            DailyPuzzleAttempt.user_id == user_id,
            DailyPuzzleAttempt.puzzle_id == puzzle_id,
        ).first()

    def save_puzzle_attempt(self, user_id, puzzle_id, attempts, solved, attempt_date, solved_at=None) -> DailyPuzzleAttempt:
        row = self.get_puzzle_attempt(user_id, puzzle_id)
        if not row:
            row = DailyPuzzleAttempt(user_id=user_id, puzzle_id=puzzle_id)
            self.db.add(row)
        row.attempts = attempts
        row.solved = solved
        row.attempt_date = attempt_date
        row.solved_at = solved_at
        self.db.commit()
        self.db.refresh(row)
        return row

    def count_solved_puzzles(self, user_id: int) -> int:
        return (
            self.db.query(func.count(DailyPuzzleAttempt.id))
            .filter(DailyPuzzleAttempt.user_id == user_id, DailyPuzzleAttempt.solved.is_(True))
            .scalar()
        ) or 0
