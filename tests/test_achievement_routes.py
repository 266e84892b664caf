from conftest import register, sample_problem


def test_overview_and_check(client, storage):
    me = register(client).json()
    overview = client.get("/api/achievements").json()
    assert len(overview) == 6
    assert not any(row["earned"] for row in overview)

    problem = storage.create_problems([sample_problem()])[0]
    client.post("/api/progress", json={"problemId": problem.id, "answer": "42"})

    # Already awarded by the progress update
    assert client.post("/api/achievements/check").json() == []

    earned = client.get(f"/api/achievements/{me['id']}").json()
    assert [a["type"] for a in earned] == ["first_problem"]
    assert earned[0]["earnedAt"]


def test_unknown_user_achievements_404(client):
    assert client.get("/api/achievements/999").status_code == 404
