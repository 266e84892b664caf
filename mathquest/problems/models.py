from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func

from mathquest.db.base import Base


class Problem(Base):
    __tablename__ = "problems"

    id = Column(Integer, primary_key=True, index=True)

    grade = Column(Integer, nullable=False, index=True)
    type = Column(String(50), nullable=False)  # addition, fractions, word_problems, ...

    question = Column(Text, nullable=False)
    # String-typed so fractions like "3/4" and money like "2.50" fit
    answer = Column(String(50), nullable=False)
    explanation = Column(Text, nullable=False)
    hint = Column(Text, nullable=True)
    options = Column(JSON, nullable=True)  # multiple choice / true-false only

    difficulty = Column(Integer, nullable=False, default=1)
    skill_level = Column(String(20), nullable=True)  # beginner | intermediate | advanced
    common_mistakes = Column(JSON, nullable=True)
    required_steps = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
