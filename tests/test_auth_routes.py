from conftest import PASSWORD, register

PROFILE = {
    "name": "Alice",
    "grade": 4,
    "securityQuestions": [
        {"question": "What is your favorite color?", "answer": "Blue"},
        {"question": "What is your pet's name?", "answer": "Rex"},
        {"question": "What is your favorite food?", "answer": "Pizza"},
    ],
}


def test_register_starts_a_session_and_hides_the_hash(client):
    resp = register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["username"] == "alice"
    assert body["score"] == 0
    assert body["level"] == 1
    assert body["role"] == "user"
    assert body["grade"] is None
    assert "passwordHash" not in body and "password_hash" not in body
    assert "access_token" in resp.cookies

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["id"] == body["id"]


def test_register_rejects_duplicates_and_bad_input(client):
    assert register(client).status_code == 201

    dup = register(client)
    assert dup.status_code == 400
    assert dup.json()["message"] == "Username already exists"

    short = register(client, username="bob", password="abc")
    assert short.status_code == 400
    assert "at least 6" in short.json()["message"]

    bad_grade = register(client, username="carol", grade=6)
    assert bad_grade.status_code == 400
    assert bad_grade.json()["message"] == "Grade must be between 3 and 5"


def test_login_logout_flow(client):
    register(client)
    client.post("/api/logout")
    assert client.get("/api/user").status_code == 401

    wrong = client.post("/api/login", json={"username": "alice", "password": "nope-nope"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Invalid username or password"

    ok = client.post("/api/login", json={"username": "alice", "password": PASSWORD})
    assert ok.status_code == 200
    assert client.get("/api/user").json()["username"] == "alice"

    assert client.post("/api/logout").json()["message"] == "Logged out"
    assert client.get("/api/user").status_code == 401


def test_unknown_user_login_is_indistinguishable(client):
    resp = client.post("/api/login", json={"username": "ghost", "password": PASSWORD})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid username or password"


def test_profile_completion(client):
    register(client)
    status = client.get("/api/user/profile-status").json()
    assert status == {
        "isComplete": False,
        "hasName": False,
        "hasGrade": False,
        "hasSecurityQuestions": False,
    }

    resp = client.patch("/api/user/profile", json=PROFILE)
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Alice"
    assert body["grade"] == 4
    assert body["securityQuestions"] == [q["question"] for q in PROFILE["securityQuestions"]]

    assert client.get("/api/user/profile-status").json()["isComplete"] is True


def test_profile_needs_three_distinct_questions(client):
    register(client)
    two = {**PROFILE, "securityQuestions": PROFILE["securityQuestions"][:2]}
    resp = client.patch("/api/user/profile", json=two)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Please provide exactly 3 security questions"

    repeated = {**PROFILE, "securityQuestions": [PROFILE["securityQuestions"][0]] * 3}
    resp = client.patch("/api/user/profile", json=repeated)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Please choose 3 different security questions"


def test_change_password(client):
    register(client)
    wrong = client.post("/api/user/password", json={
        "currentPassword": "not-mine", "newPassword": "newpass1", "confirmPassword": "newpass1",
    })
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password is incorrect"

    mismatch = client.post("/api/user/password", json={
        "currentPassword": PASSWORD, "newPassword": "newpass1", "confirmPassword": "newpass2",
    })
    assert mismatch.status_code == 400
    assert mismatch.json()["message"] == "Passwords don't match"

    ok = client.post("/api/user/password", json={
        "currentPassword": PASSWORD, "newPassword": "newpass1", "confirmPassword": "newpass1",
    })
    assert ok.status_code == 200

    client.post("/api/logout")
    assert client.post("/api/login", json={"username": "alice", "password": PASSWORD}).status_code == 401
    assert client.post("/api/login", json={"username": "alice", "password": "newpass1"}).status_code == 200


def test_reset_password_with_security_answer(client):
    register(client)
    client.patch("/api/user/profile", json=PROFILE)
    client.post("/api/logout")

    base = {
        "username": "alice",
        "securityQuestion": "What is your pet's name?",
        "newPassword": "fresh-pass",
        "confirmPassword": "fresh-pass",
    }
    wrong = client.post("/api/reset-password", json={**base, "securityAnswer": "Max"})
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Invalid username or security answer"

    ghost = client.post("/api/reset-password", json={**base, "username": "ghost", "securityAnswer": "Rex"})
    assert ghost.status_code == 400
    assert ghost.json()["message"] == wrong.json()["message"]

    ok = client.post("/api/reset-password", json={**base, "securityAnswer": "  rex "})
    assert ok.status_code == 200

    assert client.post("/api/login", json={"username": "alice", "password": "fresh-pass"}).status_code == 200


def test_security_question_list(client):
    questions = client.get("/api/security-questions").json()
    assert len(questions) == 10
    assert "What is your favorite color?" in questions
