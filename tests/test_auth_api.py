def test_register_and_me(client, candidate):
    response = client.get("/api/auth/me", headers=candidate["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["_id"] == candidate["id"]
    assert body["role"] == "Candidate"
    assert "password" not in body


def test_duplicate_email_is_rejected(client, candidate):
    response = client.post(
        "/api/auth/register",
        json={"name": "Cara Again", "email": "cara@portal.io", "password": "password123", "role": "Candidate"},
    )

    assert response.status_code == 400


def test_unknown_role_is_a_validation_error(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ada", "email": "ada@portal.io", "password": "password123", "role": "Admin"},
    )

    assert response.status_code == 400


def test_wrong_password(client, candidate):
    response = client.post("/api/auth/login", json={"email": "cara@portal.io", "password": "wrong-pass"})

    assert response.status_code == 401


def test_bad_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_missing_token(client):
    response = client.get("/api/internships/recommended")

    assert response.status_code in (401, 403)
