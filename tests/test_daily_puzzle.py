from datetime import date

from conftest import register
from mathquest.daily_puzzle.service import build_daily_puzzle, get_or_create_daily_puzzle
from mathquest.problems.answers import to_number
from mathquest.storage.memory import MemoryStorage


def _todays_puzzle(storage):
    assert len(storage.daily_puzzles) == 1
    return next(iter(storage.daily_puzzles.values()))


def test_one_puzzle_per_day():
    storage = MemoryStorage()
    day = date(2026, 10, 18)
    first = get_or_create_daily_puzzle(storage, day)
    assert get_or_create_daily_puzzle(storage, day).id == first.id
    assert get_or_create_daily_puzzle(storage, date(2026, 10, 19)).id != first.id


def test_built_puzzle_offers_the_answer_among_options():
    for _ in range(30):
        fields = build_daily_puzzle(date(2026, 10, 18))
        assert fields["answer"] in fields["options"]
        assert len(fields["options"]) == 4
        assert to_number(fields["answer"]) is not None


def test_answer_hidden_until_solved(client, storage):
    anonymous = client.get("/api/daily-puzzle")
    assert anonymous.status_code == 200
    body = anonymous.json()
    assert body["question"]
    assert body["answer"] is None
    assert body["explanation"] is None

    register(client)
    puzzle = _todays_puzzle(storage)
    client.post("/api/daily-puzzle/solve", json={"answer": puzzle.answer})
    solved = client.get("/api/daily-puzzle").json()
    assert solved["answer"] == puzzle.answer
    assert solved["explanation"]


def test_reward_paid_once_per_day(client, storage):
    register(client)
    client.get("/api/daily-puzzle")
    puzzle = _todays_puzzle(storage)

    wrong = client.post("/api/daily-puzzle/solve", json={"answer": "not a number"}).json()
    assert wrong["correct"] is False
    assert wrong["pointsAwarded"] == 0
    assert wrong["explanation"] is None

    right = client.post("/api/daily-puzzle/solve", json={"answer": puzzle.answer}).json()
    assert right["correct"] is True
    assert right["alreadySolved"] is False
    assert right["pointsAwarded"] == puzzle.reward
    assert right["attempts"] == 2
    assert right["user"]["score"] == puzzle.reward
    assert [a["type"] for a in right["newAchievements"]] == ["puzzle_starter"]

    again = client.post("/api/daily-puzzle/solve", json={"answer": puzzle.answer}).json()
    assert again["alreadySolved"] is True
    assert again["pointsAwarded"] == 0
    assert again["user"]["score"] == puzzle.reward

    status = client.get("/api/daily-puzzle/status").json()
    assert status["solved"] is True
    assert status["attempts"] == 3
    assert status["puzzleId"] == puzzle.id


def test_solving_needs_a_session(client):
    assert client.post("/api/daily-puzzle/solve", json={"answer": "1"}).status_code == 401
    assert client.get("/api/daily-puzzle/status").status_code == 401


def test_creating_a_stored_date_again_keeps_the_first_puzzle():
    storage = MemoryStorage()
    day = date(2026, 10, 18)
    first = storage.create_daily_puzzle(**build_daily_puzzle(day))
    again = storage.create_daily_puzzle(**build_daily_puzzle(day))
    assert again.id == first.id
    assert len(storage.daily_puzzles) == 1
