from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint

from mathquest.db.base import Base


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    type = Column(String(64), nullable=False)  # e.g. "first_problem", "puzzle_pro"
    title = Column(String(100), nullable=False)
    description = Column(String(255), nullable=False, default="")
    icon = Column(String(16), nullable=False, default="")
    category = Column(String(32), nullable=False, default="practice")

    progress = Column(Integer, nullable=False, default=0)
    target = Column(Integer, nullable=False, default=1)

    earned_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "type", name="uq_user_achievement"),
    )
