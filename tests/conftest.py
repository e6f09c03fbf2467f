import pytest
import mongomock
from fastapi.testclient import TestClient

from internship_portal.core.config import Settings
from internship_portal.main import create_app


@pytest.fixture
def db():
    return mongomock.MongoClient()["internship_portal_test"]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        upload_dir=str(tmp_path / "uploads"),
        jwt_secret_key="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def client(settings, db):
    app = create_app(settings=settings, db=db)
    with TestClient(app) as c:
        yield c


def register_user(client, name, email, role, password="password123"):
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert response.status_code == 201, response.text
    login = client.post("/api/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    token = login.json()["access_token"]
    return {
        "id": response.json()["_id"],
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def candidate(client):
    return register_user(client, "Cara Candidate", "cara@portal.io", "Candidate")


@pytest.fixture
def other_candidate(client):
    return register_user(client, "Olly Other", "olly@portal.io", "Candidate")


@pytest.fixture
def employer(client):
    return register_user(client, "Acme Hiring", "jobs@acme.io", "Employer")


@pytest.fixture
def other_employer(client):
    return register_user(client, "Globex Hiring", "jobs@globex.io", "Employer")


def post_internship(client, employer, **overrides):
    body = {
        "title": "Backend Intern",
        "description": "Build APIs",
        "required_skills": ["Python", "SQL"],
        "location": "Remote",
        "stipend": "1000",
        "duration": "3 months",
    }
    body.update(overrides)
    response = client.post("/api/internships", json=body, headers=employer["headers"])
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def internship(client, employer):
    return post_internship(client, employer)


@pytest.fixture
def application(client, candidate, internship):
    response = client.post(
        "/api/applications",
        data={"internship_id": internship["_id"], "cover_letter": "Hire me"},
        headers=candidate["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()
