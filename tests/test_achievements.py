from datetime import datetime, timezone

from mathquest.achievements.evaluator import CATALOG, achievement_overview, evaluate_achievements
from mathquest.storage.memory import MemoryStorage


def _user_with_completed(storage, completed):
    user = storage.create_user(username="bob", password_hash="x:y")
    for problem_id in range(1, completed + 1):
        storage.save_progress(user.id, problem_id, True, 1, datetime.now(timezone.utc))
    return user


def test_first_problem_is_awarded_once():
    storage = MemoryStorage()
    user = _user_with_completed(storage, 1)

    first = evaluate_achievements(storage, user.id)
    assert [a.type for a in first] == ["first_problem"]

    assert evaluate_achievements(storage, user.id) == []
    assert len(storage.list_achievements(user.id)) == 1


def test_thresholds_award_everything_met_at_once():
    storage = MemoryStorage()
    user = _user_with_completed(storage, 10)
    storage.update_user(user.id, score=150)

    awarded = {a.type for a in evaluate_achievements(storage, user.id)}
    assert awarded == {"first_problem", "problem_solver", "century_club"}


def test_incomplete_progress_does_not_count():
    storage = MemoryStorage()
    user = storage.create_user(username="bob", password_hash="x:y")
    storage.save_progress(user.id, 1, False, 3, datetime.now(timezone.utc))
    assert evaluate_achievements(storage, user.id) == []


def test_solved_daily_puzzles_count_toward_puzzle_badges():
    storage = MemoryStorage()
    user = storage.create_user(username="bob", password_hash="x:y")
    now = datetime.now(timezone.utc)
    storage.save_puzzle_attempt(user.id, 1, 1, True, now, now)
    storage.save_puzzle_attempt(user.id, 2, 2, False, now)

    assert [a.type for a in evaluate_achievements(storage, user.id)] == ["puzzle_starter"]


def test_overview_lists_the_whole_catalog_with_progress():
    storage = MemoryStorage()
    user = _user_with_completed(storage, 3)
    evaluate_achievements(storage, user.id)

    overview = {row["type"]: row for row in achievement_overview(storage, user.id)}
    assert set(overview) == {c.type for c in CATALOG}
    assert overview["first_problem"]["earned"] is True
    assert overview["problem_solver"]["earned"] is False
    assert overview["problem_solver"]["progress"] == 3
    assert overview["problem_solver"]["target"] == 10
