from sqlalchemy import Column, Integer, Boolean, DateTime, UniqueConstraint

from mathquest.db.base import Base


class Progress(Base):
    """
    A user's attempt state against one problem.
    problem_id carries no foreign key: regenerating the bank deletes problems
    while their progress rows stay behind.
    """
    __tablename__ = "progress"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, nullable=False, index=True)
    problem_id = Column(Integer, nullable=False)

    completed = Column(Boolean, nullable=False, default=False)
    attempts = Column(Integer, nullable=False, default=0)
    last_attempt = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "problem_id", name="uq_user_problem_progress"),
    )
