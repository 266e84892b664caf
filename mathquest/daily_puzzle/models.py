from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, JSON, UniqueConstraint

from mathquest.db.base import Base


class DailyPuzzle(Base):
    """
    The featured challenge for one calendar date.
    Keeps its own copy of the problem content so bank regeneration never
    invalidates a published puzzle.
    """
    __tablename__ = "daily_puzzles"

    id = Column(Integer, primary_key=True, index=True)

    puzzle_date = Column(Date, nullable=False, unique=True, index=True)

    title = Column(String(255), nullable=False)
    scenario = Column(Text, nullable=False)
    question = Column(Text, nullable=False)
    grade = Column(Integer, nullable=False)
    answer = Column(String(50), nullable=False)
    explanation = Column(Text, nullable=False)
    options = Column(JSON, nullable=True)
    difficulty = Column(Integer, nullable=False, default=1)
    category = Column(String(50), nullable=False)
    real_world_context = Column(Text, nullable=False, default="")
    visual_aid = Column(Text, nullable=True)

    reward = Column(Integer, nullable=False, default=10)

    # Source problem, if the puzzle was cut from the bank
    problem_id = Column(Integer, nullable=True)


class DailyPuzzleAttempt(Base):
    __tablename__ = "daily_puzzle_attempts"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, nullable=False, index=True)
    puzzle_id = Column(Integer, nullable=False)

    attempts = Column(Integer, nullable=False, default=0)
    solved = Column(Boolean, nullable=False, default=False)

    attempt_date = Column(DateTime(timezone=True), nullable=False)
    solved_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "puzzle_id", name="uq_user_daily_puzzle"),
    )
