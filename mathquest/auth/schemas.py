from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from mathquest.core.schemas import ApiModel

# Offered by the profile and password-reset forms
SECURITY_QUESTIONS = [
    "What is your favorite color?",
    "What is your pet's name?",
    "What is your favorite subject in school?",
    "What is your favorite food?",
    "Who is your favorite teacher?",
    "What is your favorite book?",
    "What city were you born in?",
    "What is your best friend's name?",
    "What is your favorite sport?",
    "What is your favorite movie?",
]

MIN_PASSWORD_LENGTH = 6


def _check_grade(value: Optional[int]) -> Optional[int]:
    if value is not None and not 3 <= value <= 5:
        raise ValueError("Grade must be between 3 and 5")
    return value


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return value


class RegisterIn(ApiModel):
    username: str
    password: str
    name: Optional[str] = None
    grade: Optional[int] = None

    @field_validator("username")
    @classmethod
    def username_shape(cls, v: str) -> str:
        v = v.strip()
        if not 3 <= len(v) <= 50:
            raise ValueError("Username must be between 3 and 50 characters")
        return v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None

    @field_validator("grade")
    @classmethod
    def grade_range(cls, v: Optional[int]) -> Optional[int]:
        return _check_grade(v)


class LoginIn(ApiModel):
    username: str
    password: str


class SecurityQuestionIn(ApiModel):
    question: str
    answer: str

    @field_validator("question", "answer")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Security questions and answers cannot be empty")
        return v


class ProfileUpdateIn(ApiModel):
    name: str
    grade: int
    security_questions: list[SecurityQuestionIn]

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("grade")
    @classmethod
    def grade_range(cls, v: int) -> int:
        return _check_grade(v)

    @field_validator("security_questions")
    @classmethod
    def three_distinct(cls, v: list[SecurityQuestionIn]) -> list[SecurityQuestionIn]:
        if len(v) != 3:
            raise ValueError("Please provide exactly 3 security questions")
        if len({q.question.lower() for q in v}) != 3:
            raise ValueError("Please choose 3 different security questions")
        return v


class PasswordChangeIn(ApiModel):
    current_password: str
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class PasswordResetIn(ApiModel):
    username: str
    security_question: str
    security_answer: str
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class UserOut(ApiModel):
    id: int
    username: str
    name: Optional[str] = None
    grade: Optional[int] = None
    score: int
    level: int
    role: str
    created_at: Optional[datetime] = None
    security_questions: list[str] = Field(default_factory=list)


class ProfileStatusOut(ApiModel):
    is_complete: bool
    has_name: bool
    has_grade: bool
    has_security_questions: bool
