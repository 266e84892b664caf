from conftest import login_admin, register, sample_problem


def test_correct_answer_awards_points_once(client, storage):
    register(client)
    problem = storage.create_problems([sample_problem(answer="42", difficulty=2)])[0]

    wrong = client.post("/api/progress", json={"problemId": problem.id, "answer": "41"})
    assert wrong.status_code == 200
    body = wrong.json()
    assert body["correct"] is False
    assert body["pointsAwarded"] == 0
    assert body["progress"]["completed"] is False
    assert body["progress"]["attempts"] == 1

    right = client.post("/api/progress", json={"problemId": problem.id, "answer": "42"}).json()
    assert right["correct"] is True
    assert right["pointsAwarded"] == 20
    assert right["score"] == 20
    assert right["progress"]["attempts"] == 2
    assert right["progress"]["completed"] is True
    assert [a["type"] for a in right["newAchievements"]] == ["first_problem"]

    again = client.post("/api/progress", json={"problemId": problem.id, "answer": "42"}).json()
    assert again["pointsAwarded"] == 0
    assert again["score"] == 20
    assert again["progress"]["attempts"] == 3
    assert again["newAchievements"] == []

    rows = client.get("/api/progress").json()
    assert len(rows) == 1
    assert rows[0]["problemId"] == problem.id


def test_completed_flag_counts_without_an_answer(client, storage):
    register(client)
    problem = storage.create_problems([sample_problem(difficulty=1)])[0]
    body = client.post("/api/progress", json={"problemId": problem.id, "completed": True}).json()
    assert body["correct"] is True
    assert body["pointsAwarded"] == 10


def test_level_follows_score(client, storage):
    register(client)
    problems = storage.create_problems([sample_problem(difficulty=5) for _ in range(2)])
    for problem in problems:
        body = client.post("/api/progress", json={"problemId": problem.id, "answer": "42"}).json()
    assert body["score"] == 100
    assert body["level"] == 2


def test_progress_rejects_bad_requests(client, storage):
    register(client)
    problem = storage.create_problems([sample_problem()])[0]

    empty = client.post("/api/progress", json={"problemId": problem.id})
    assert empty.status_code == 400
    assert empty.json()["message"] == "Provide an answer or a completed flag"

    missing = client.post("/api/progress", json={"problemId": 999, "answer": "1"})
    assert missing.status_code == 404


def test_progress_needs_a_session(client):
    assert client.get("/api/progress").status_code == 401
    assert client.post("/api/progress", json={"problemId": 1, "answer": "1"}).status_code == 401


def test_other_users_progress_is_admin_only(client, other_client, storage):
    alice = register(client).json()
    register(other_client, username="bob")

    assert other_client.get(f"/api/progress/{alice['id']}").status_code == 403
    assert client.get(f"/api/progress/{alice['id']}").status_code == 200

    login_admin(other_client, storage)
    assert other_client.get(f"/api/progress/{alice['id']}").status_code == 200


def test_achievement_failure_does_not_undo_the_score(client, storage, monkeypatch):
    register(client)
    problem = storage.create_problems([sample_problem(difficulty=3)])[0]

    def broken(*args, **kwargs):
        raise RuntimeError("achievement store down")

    monkeypatch.setattr("mathquest.progress.routes.evaluate_achievements", broken)
    body = client.post("/api/progress", json={"problemId": problem.id, "answer": "42"}).json()
    assert body["score"] == 30
    assert body["newAchievements"] == []
    assert client.get("/api/user").json()["score"] == 30
