from conftest import login_admin, register


def test_admin_creates_and_deletes_users(client, storage):
    admin = login_admin(client, storage)

    created = client.post("/api/users", json={"username": "dana", "password": "secret123", "grade": 3})
    assert created.status_code == 201
    dana = created.json()
    assert dana["role"] == "user"
    assert dana["grade"] == 3

    fetched = client.get(f"/api/users/{dana['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["username"] == "dana"

    deleted = client.delete(f"/api/users/{dana['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/api/users/{dana['id']}").status_code == 404
    assert client.delete(f"/api/users/{dana['id']}").status_code == 404

    own = client.delete(f"/api/users/{admin['id']}")
    assert own.status_code == 403


def test_regular_users_cannot_manage_accounts(client):
    me = register(client).json()
    resp = client.post("/api/users", json={"username": "erin", "password": "secret123"})
    assert resp.status_code == 403
    assert resp.json()["message"] == "Admin access required"
    assert client.delete(f"/api/users/{me['id']}").status_code == 403


def test_user_lookup_requires_a_session(client):
    assert client.get("/api/users/1").status_code == 401


PROFILE = {
    "name": "Alice",
    "grade": 4,
    "securityQuestions": [
        {"question": "What is your favorite color?", "answer": "Blue"},
        {"question": "What is your pet's name?", "answer": "Rex"},
        {"question": "What is your favorite food?", "answer": "Pizza"},
    ],
}


def test_recovery_questions_only_visible_to_owner_and_admin(client, other_client, storage):
    alice = register(client).json()
    client.patch("/api/user/profile", json=PROFILE)

    own = client.get(f"/api/users/{alice['id']}").json()
    assert len(own["securityQuestions"]) == 3

    register(other_client, username="mallory")
    seen = other_client.get(f"/api/users/{alice['id']}")
    assert seen.status_code == 200
    assert seen.json()["username"] == "alice"
    assert "securityQuestions" not in seen.json()

    login_admin(other_client, storage)
    assert len(other_client.get(f"/api/users/{alice['id']}").json()["securityQuestions"]) == 3
