from conftest import login_admin, register, sample_problem


def test_list_problems_filters_by_grade_and_type(client, storage):
    storage.create_problems([
        sample_problem(grade=3, type="addition"),
        sample_problem(grade=3, type="division"),
        sample_problem(grade=5, type="addition"),
    ])

    grade3 = client.get("/api/problems", params={"grade": 3})
    assert grade3.status_code == 200
    assert len(grade3.json()) == 2
    assert all(p["grade"] == 3 for p in grade3.json())

    division = client.get("/api/problems", params={"grade": 3, "type": "division"}).json()
    assert [p["type"] for p in division] == ["division"]
    assert "requiredSteps" in division[0]
    assert "commonMistakes" in division[0]


def test_list_problems_validates_query(client):
    assert client.get("/api/problems").status_code == 400
    assert client.get("/api/problems", params={"grade": 6}).status_code == 400
    unknown = client.get("/api/problems", params={"grade": 4, "type": "geometry"})
    assert unknown.status_code == 400
    assert unknown.json()["message"] == "Unknown problem type: geometry"


def test_get_and_check_problem(client, storage):
    problem = storage.create_problems([sample_problem(answer="3/4", type="fractions")])[0]

    assert client.get(f"/api/problems/{problem.id}").json()["answer"] == "3/4"
    assert client.get("/api/problems/999").status_code == 404

    right = client.post(f"/api/problems/{problem.id}/check", json={"answer": "6/8"}).json()
    assert right["correct"] is True
    assert right["explanation"]
    wrong = client.post(f"/api/problems/{problem.id}/check", json={"answer": "1/2"}).json()
    assert wrong["correct"] is False


def test_regenerate_requires_admin(client):
    register(client)
    resp = client.post("/api/problems/regenerate", json={"countPerCategory": 2})
    assert resp.status_code == 403


def test_regenerate_replaces_the_bank(client, storage):
    old = storage.create_problems([sample_problem()])[0]
    login_admin(client, storage)

    resp = client.post("/api/problems/regenerate", json={"countPerCategory": 2})
    assert resp.status_code == 200
    # 3 grades x 8 categories x 2
    assert resp.json()["created"] == 48
    assert storage.count_problems() == 48
    assert client.get(f"/api/problems/{old.id}").status_code == 404

    too_many = client.post("/api/problems/regenerate", json={"countPerCategory": 500})
    assert too_many.status_code == 400


def test_check_rejects_oversized_answers(client, storage):
    problem = storage.create_problems([sample_problem()])[0]

    resp = client.post(f"/api/problems/{problem.id}/check", json={"answer": "9" * 51})
    assert resp.status_code == 400

    exponent = client.post(f"/api/problems/{problem.id}/check", json={"answer": "1e400000000"})
    assert exponent.status_code == 200
    assert exponent.json()["correct"] is False
