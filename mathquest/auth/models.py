from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from mathquest.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String(50), unique=True, index=True, nullable=False)

    # "salt:digest", never plaintext
    password_hash = Column(String, nullable=False)

    # Profile: both stay NULL until the profile is completed
    name = Column(String(100), nullable=True)
    grade = Column(Integer, nullable=True)  # 3..5

    score = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)  # derived from score

    # User role: "user" (default) or "admin"
    role = Column(String, default="user", nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Updated on every authenticated request
    last_active = Column(DateTime(timezone=True), nullable=True)


class SecurityQuestion(Base):
    """
    One of the three recovery questions a user picks when completing the profile.
    Answers are stored as a salted PBKDF2 digest of the normalized answer.
    """
    __tablename__ = "security_questions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    question = Column(String(255), nullable=False)
    answer_hash = Column(String, nullable=False)
    answer_salt = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "question", name="uq_user_security_question"),
    )
