from tests.conftest import post_internship


def test_create_and_get(client, employer, internship):
    response = client.get(f"/api/internships/{internship['_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Backend Intern"
    assert body["required_skills"] == ["Python", "SQL"]
    assert body["company_id"]["_id"] == employer["id"]
    assert body["company_id"]["name"] == "Acme Hiring"
    assert body["posted_date"] is not None


def test_candidate_cannot_post(client, candidate):
    response = client.post(
        "/api/internships",
        json={"title": "X", "description": "Y"},
        headers=candidate["headers"],
    )

    assert response.status_code == 403


def test_missing_title_is_rejected(client, employer):
    response = client.post("/api/internships", json={"description": "Y"}, headers=employer["headers"])

    assert response.status_code == 400


def test_unknown_and_malformed_ids_are_404(client):
    assert client.get("/api/internships/0123456789abcdef01234567").status_code == 404
    assert client.get("/api/internships/not-an-id").status_code == 404


def test_filters(client, employer):
    post_internship(client, employer, title="A", location="Berlin", required_skills=["Go"])
    post_internship(client, employer, title="B", location="Remote", required_skills=["Python"])
    post_internship(client, employer, title="C", location="Remote", required_skills=["Rust", "SQL"])

    by_location = client.get("/api/internships", params={"location": "Remote"}).json()
    by_skills = client.get("/api/internships", params={"skills": "Go,SQL"}).json()

    assert [i["title"] for i in by_location] == ["B", "C"]
    assert [i["title"] for i in by_skills] == ["A", "C"]


def test_owner_updates_only_sent_fields(client, employer, internship):
    response = client.put(
        f"/api/internships/{internship['_id']}",
        json={"stipend": "2000"},
        headers=employer["headers"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["stipend"] == "2000"
    assert body["title"] == "Backend Intern"
    assert body["company_id"] == employer["id"]


def test_other_employer_cannot_update_or_delete(client, other_employer, internship):
    update = client.put(
        f"/api/internships/{internship['_id']}",
        json={"title": "Hijacked"},
        headers=other_employer["headers"],
    )
    delete = client.delete(f"/api/internships/{internship['_id']}", headers=other_employer["headers"])

    assert update.status_code == 403
    assert delete.status_code == 403
    assert client.get(f"/api/internships/{internship['_id']}").json()["title"] == "Backend Intern"


def test_owner_deletes(client, employer, internship):
    response = client.delete(f"/api/internships/{internship['_id']}", headers=employer["headers"])

    assert response.status_code == 200
    assert client.get(f"/api/internships/{internship['_id']}").status_code == 404


def test_employer_lists_own_postings(client, employer, other_employer, internship):
    post_internship(client, other_employer, title="Elsewhere")

    response = client.get("/api/internships/employer", headers=employer["headers"])

    assert response.status_code == 200
    assert [i["_id"] for i in response.json()] == [internship["_id"]]


def test_recommended_orders_by_match_score(client, candidate, employer):
    low = post_internship(client, employer, title="Low", required_skills=["Java"])
    mid = post_internship(client, employer, title="Mid", required_skills=["Python", "SQL", "Go"])
    high = post_internship(client, employer, title="High", required_skills=["Python"])
    client.post("/api/profiles", json={"skills": ["Python", "SQL"]}, headers=candidate["headers"])

    response = client.get("/api/internships/recommended", headers=candidate["headers"])

    assert response.status_code == 200
    ranked = [(i["_id"], i["matchScore"]) for i in response.json()]
    assert ranked == [(high["_id"], 100), (mid["_id"], 67), (low["_id"], 0)]


def test_recommended_without_profile_scores_zero(client, candidate, employer):
    first = post_internship(client, employer, title="First")
    second = post_internship(client, employer, title="Second")

    body = client.get("/api/internships/recommended", headers=candidate["headers"]).json()

    assert [i["_id"] for i in body] == [first["_id"], second["_id"]]
    assert {i["matchScore"] for i in body} == {0}


def test_employer_cannot_get_recommendations(client, employer):
    response = client.get("/api/internships/recommended", headers=employer["headers"])

    assert response.status_code == 403


def test_save_list_and_unsave(client, candidate, internship):
    saved = client.post(
        "/api/internships/save",
        json={"internship_id": internship["_id"]},
        headers=candidate["headers"],
    )
    again = client.post(
        "/api/internships/save",
        json={"internship_id": internship["_id"]},
        headers=candidate["headers"],
    )

    assert saved.status_code == 201
    assert again.json()["_id"] == saved.json()["_id"]

    listed = client.get("/api/internships/saved", headers=candidate["headers"]).json()
    assert [i["_id"] for i in listed] == [internship["_id"]]

    removed = client.delete(f"/api/internships/saved/{internship['_id']}", headers=candidate["headers"])
    assert removed.status_code == 200
    assert client.get("/api/internships/saved", headers=candidate["headers"]).json() == []

    missing = client.delete(f"/api/internships/saved/{internship['_id']}", headers=candidate["headers"])
    assert missing.status_code == 404


def test_saved_list_skips_deleted_internships(client, candidate, employer, internship):
    client.post("/api/internships/save", json={"internship_id": internship["_id"]}, headers=candidate["headers"])
    client.delete(f"/api/internships/{internship['_id']}", headers=employer["headers"])

    response = client.get("/api/internships/saved", headers=candidate["headers"])

    assert response.status_code == 200
    assert response.json() == []


def test_employer_cannot_save(client, employer, internship):
    response = client.post(
        "/api/internships/save",
        json={"internship_id": internship["_id"]},
        headers=employer["headers"],
    )

    assert response.status_code == 403
