def send(client, user, application_id, text):
    return client.post(
        "/api/messages",
        json={"application_id": application_id, "message": text},
        headers=user["headers"],
    )


def test_candidate_message_goes_to_employer(client, candidate, employer, application):
    response = send(client, candidate, application["_id"], "Any update?")

    assert response.status_code == 201
    body = response.json()
    assert body["sender_id"] == candidate["id"]
    assert body["receiver_id"] == employer["id"]
    assert body["is_read"] is False


def test_employer_message_goes_to_candidate(client, candidate, employer, application):
    body = send(client, employer, application["_id"], "Interview Monday").json()

    assert body["sender_id"] == employer["id"]
    assert body["receiver_id"] == candidate["id"]


def test_outsiders_cannot_message(client, db, other_candidate, other_employer, application):
    assert send(client, other_candidate, application["_id"], "Hi").status_code == 403
    assert send(client, other_employer, application["_id"], "Hi").status_code == 403
    assert db["messages"].count_documents({}) == 0


def test_message_on_missing_application(client, candidate):
    assert send(client, candidate, "0123456789abcdef01234567", "Hi").status_code == 404


def test_inboxes(client, candidate, employer, application):
    send(client, candidate, application["_id"], "First")
    send(client, employer, application["_id"], "Second")

    candidate_box = client.get("/api/messages/candidate", headers=candidate["headers"]).json()
    employer_box = client.get("/api/messages/employer", headers=employer["headers"]).json()

    assert [m["message"] for m in candidate_box] == ["Second", "First"]
    assert candidate_box[0]["sender_id"]["name"] == "Acme Hiring"
    assert candidate_box[0]["application_id"]["internship_id"]["title"] == "Backend Intern"
    assert len(employer_box) == 2
    assert employer_box[0]["application_id"]["candidate_id"]["email"] == "cara@portal.io"


def test_inbox_role_gating(client, candidate, employer):
    assert client.get("/api/messages/employer", headers=candidate["headers"]).status_code == 403
    assert client.get("/api/messages/candidate", headers=employer["headers"]).status_code == 403


def test_only_receiver_marks_read(client, candidate, employer, application):
    message = send(client, candidate, application["_id"], "Hello").json()
    url = f"/api/messages/{message['_id']}/read"

    assert client.put(url, headers=candidate["headers"]).status_code == 403

    first = client.put(url, headers=employer["headers"])
    second = client.put(url, headers=employer["headers"])
    assert first.status_code == 200
    assert first.json()["is_read"] is True
    assert second.status_code == 200
    assert second.json()["is_read"] is True


def test_applicant_profile_for_owner(client, candidate, employer, other_employer, application):
    client.post(
        "/api/profiles",
        json={"skills": ["Python"], "education": "BSc"},
        headers=candidate["headers"],
    )
    url = f"/api/messages/candidate-profile/{application['_id']}"

    response = client.get(url, headers=employer["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["name"] == "Cara Candidate"
    assert body["profile"]["skills"] == ["Python"]
    assert client.get(url, headers=other_employer["headers"]).status_code == 403


def test_applicant_without_profile_gets_empty_profile(client, employer, application):
    response = client.get(
        f"/api/messages/candidate-profile/{application['_id']}", headers=employer["headers"]
    )

    assert response.status_code == 200
    assert response.json()["profile"]["skills"] == []
