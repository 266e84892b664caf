from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mathquest.core.deps import get_storage
from mathquest.core.errors import ConflictError, NotFoundError
from mathquest.core.security import hash_security_answer
from mathquest.db.base import Base
from mathquest.main import app
from mathquest.storage.sql import SqlStorage

from conftest import PASSWORD, sample_problem


@pytest.fixture
def sql_storage():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield SqlStorage(db)
    finally:
        db.close()
        engine.dispose()


def test_user_lifecycle(sql_storage):
    user = sql_storage.create_user(username="alice", password_hash="s:h", grade=4)
    user_id = user.id
    assert user_id
    assert user.score == 0 and user.level == 1 and user.role == "user"
    assert sql_storage.get_user_by_username("alice").id == user.id

    updated = sql_storage.update_user(user.id, score=120, level=2)
    assert updated.score == 120

    with pytest.raises(NotFoundError):
        sql_storage.update_user(999, score=1)

    assert sql_storage.delete_user(user_id) is True
    assert sql_storage.get_user(user_id) is None
    assert sql_storage.delete_user(user_id) is False


def test_security_questions_are_replaced_not_appended(sql_storage):
    user = sql_storage.create_user(username="alice", password_hash="s:h")
    first = [(q, hash_security_answer("a")) for q in ("Q1", "Q2", "Q3")]
    sql_storage.replace_security_questions(user.id, first)
    second = [(q, hash_security_answer("b")) for q in ("Q1", "Q4", "Q5")]
    sql_storage.replace_security_questions(user.id, second)

    questions = [q.question for q in sql_storage.get_security_questions(user.id)]
    assert questions == ["Q1", "Q4", "Q5"]


def test_problem_bank_filtering_and_wipe(sql_storage):
    sql_storage.create_problems([
        sample_problem(grade=3, type="addition"),
        sample_problem(grade=3, type="division"),
        sample_problem(grade=4, type="addition", options=["1", "2"]),
    ])
    assert sql_storage.count_problems() == 3
    assert len(sql_storage.list_problems(3)) == 2
    assert [p.type for p in sql_storage.list_problems(3, type="division")] == ["division"]
    assert sql_storage.list_problems(4)[0].options == ["1", "2"]
    assert len(sql_storage.list_problems(3, limit=1)) == 1

    assert sql_storage.delete_all_problems() == 3
    assert sql_storage.count_problems() == 0


def test_progress_upserts_one_row_per_problem(sql_storage):
    now = datetime.now(timezone.utc)
    sql_storage.save_progress(1, 10, False, 1, now)
    sql_storage.save_progress(1, 10, True, 2, now)
    sql_storage.save_progress(1, 11, True, 1, now)

    rows = sql_storage.list_progress(1)
    assert len(rows) == 2
    assert sql_storage.get_progress(1, 10).attempts == 2
    assert sql_storage.count_completed_problems(1) == 2
    assert sql_storage.count_completed_problems(2) == 0


def test_daily_puzzle_lookup_by_date_window(sql_storage):
    puzzle = sql_storage.create_daily_puzzle(
        puzzle_date=date(2026, 3, 14),
        title="Daily Puzzle",
        scenario="Pie day",
        question="How many slices?",
        grade=4,
        answer="8",
        explanation="Count them.",
        options=["6", "7", "8", "9"],
        difficulty=2,
        category="multiplication",
        real_world_context="Pie day",
        reward=10,
    )
    assert sql_storage.find_daily_puzzle(date(2026, 3, 14), date(2026, 3, 15)).id == puzzle.id
    assert sql_storage.find_daily_puzzle(date(2026, 3, 15), date(2026, 3, 16)) is None

    now = datetime.now(timezone.utc)
    sql_storage.save_puzzle_attempt(1, puzzle.id, 1, False, now)
    sql_storage.save_puzzle_attempt(1, puzzle.id, 2, True, now, now)
    attempt = sql_storage.get_puzzle_attempt(1, puzzle.id)
    assert attempt.attempts == 2 and attempt.solved
    assert sql_storage.count_solved_puzzles(1) == 1


def _puzzle_fields(day):
    return {
        "puzzle_date": day,
        "title": "Daily Puzzle",
        "scenario": "Pie day",
        "question": "How many slices?",
        "grade": 4,
        "answer": "8",
        "explanation": "Count them.",
        "options": ["6", "7", "8", "9"],
        "difficulty": 2,
        "category": "multiplication",
        "real_world_context": "Pie day",
        "reward": 10,
    }


def test_duplicate_username_is_a_conflict_and_session_recovers(sql_storage):
    sql_storage.create_user(username="alice", password_hash="s:h")
    with pytest.raises(ConflictError):
        sql_storage.create_user(username="alice", password_hash="s:h")

    assert sql_storage.create_user(username="bob", password_hash="s:h").id
    assert len(sql_storage.list_users()) == 2


def test_second_puzzle_for_a_date_returns_the_stored_one(sql_storage):
    first = sql_storage.create_daily_puzzle(**_puzzle_fields(date(2026, 5, 1)))
    second = sql_storage.create_daily_puzzle(**{**_puzzle_fields(date(2026, 5, 1)), "answer": "9"})
    assert second.id == first.id
    assert second.answer == "8"


def test_register_race_returns_400(sql_storage, monkeypatch):
    sql_storage.create_user(username="alice", password_hash="s:h")
    # The existence check misses the row a concurrent request just wrote
    monkeypatch.setattr(sql_storage, "get_user_by_username", lambda username: None)

    app.dependency_overrides[get_storage] = lambda: sql_storage
    try:
        with TestClient(app) as client:
            resp = client.post("/api/register", json={"username": "alice", "password": PASSWORD})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 400
    assert resp.json()["message"] == "Username already exists"
