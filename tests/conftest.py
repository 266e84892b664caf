import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Environment must be in place before any mathquest module is imported.
_db_dir = tempfile.mkdtemp(prefix="mathquest-tests-")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SEED_PROBLEMS_ON_STARTUP"] = "0"
os.environ["ENABLE_DEBUG_ROUTES"] = "1"
# No implicit main admin: admin rights come from the role column only
os.environ["MAIN_ADMIN_USER_ID"] = "-1"

from mathquest.core.deps import get_storage  # noqa: E402
from mathquest.core.security import hash_password  # noqa: E402
from mathquest.main import app  # noqa: E402
from mathquest.storage.memory import MemoryStorage  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def other_client(storage):
    """A second browser session against the same storage."""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client


def register(client, username="alice", password=PASSWORD, **extra):
    body = {"username": username, "password": password, **extra}
    return client.post("/api/register", json=body)


def login_admin(client, storage, username="coach"):
    storage.create_user(username=username, password_hash=hash_password(PASSWORD), role="admin")
    resp = client.post("/api/login", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200
    return resp.json()


def sample_problem(grade=3, type="addition", answer="42", difficulty=2, **extra):
    fields = {
        "grade": grade,
        "type": type,
        "question": "What is 20 + 22?",
        "answer": answer,
        "explanation": "Add the tens, then the ones.",
        "hint": "Start with the ones.",
        "options": None,
        "difficulty": difficulty,
        "skill_level": "beginner",
        "common_mistakes": ["Forgetting to carry"],
        "required_steps": ["Add the tens, then the ones."],
    }
    fields.update(extra)
    return fields
