def test_profile_missing_until_written(client, candidate):
    assert client.get("/api/profiles", headers=candidate["headers"]).status_code == 404


def test_candidate_upsert_keeps_omitted_fields(client, candidate):
    first = client.post(
        "/api/profiles",
        json={"skills": ["Python", "SQL", "Python"], "education": "BSc"},
        headers=candidate["headers"],
    )
    second = client.post("/api/profiles", json={"experience": "1 year"}, headers=candidate["headers"])

    assert first.status_code == 200
    assert first.json()["skills"] == ["Python", "SQL"]
    body = second.json()
    assert body["skills"] == ["Python", "SQL"]
    assert body["education"] == "BSc"
    assert body["experience"] == "1 year"
    assert client.get("/api/profiles", headers=candidate["headers"]).json()["_id"] == body["_id"]


def test_employer_profile(client, employer):
    client.post("/api/profiles", json={"company": "Acme", "industry": "Tools"}, headers=employer["headers"])
    response = client.post("/api/profiles", json={"website": "https://acme.io"}, headers=employer["headers"])

    body = response.json()
    assert body["company"] == "Acme"
    assert body["website"] == "https://acme.io"
    assert "skills" not in body


def test_resume_upload_creates_profile(client, candidate):
    response = client.post(
        "/api/profiles/upload-resume",
        files={"resume": ("cv.docx", b"docx-bytes",
                          "application/vnd.openxmlformats-officedocument.wordprocessingml.document")},
        headers=candidate["headers"],
    )

    assert response.status_code == 200
    resume_url = response.json()["resume_url"]
    assert resume_url.startswith(f"/uploads/{candidate['id']}-")
    profile = client.get("/api/profiles", headers=candidate["headers"]).json()
    assert profile["resume_url"] == resume_url
    assert profile["skills"] == []


def test_resume_upload_rejections(client, settings, candidate, employer):
    wrong_type = client.post(
        "/api/profiles/upload-resume",
        files={"resume": ("cv.txt", b"text", "text/plain")},
        headers=candidate["headers"],
    )
    too_big = client.post(
        "/api/profiles/upload-resume",
        files={"resume": ("cv.pdf", b"0" * (settings.max_resume_size_bytes + 1), "application/pdf")},
        headers=candidate["headers"],
    )
    no_file = client.post("/api/profiles/upload-resume", headers=candidate["headers"])
    employer_upload = client.post(
        "/api/profiles/upload-resume",
        files={"resume": ("cv.pdf", b"%PDF", "application/pdf")},
        headers=employer["headers"],
    )

    assert wrong_type.status_code == 400
    assert too_big.status_code == 400
    assert no_file.status_code == 400
    assert employer_upload.status_code == 403


def test_profile_image_upload(client, employer):
    response = client.post(
        "/api/profiles/upload-profile-image",
        files={"profileImage": ("logo.png", b"\x89PNG", "image/png")},
        headers=employer["headers"],
    )

    assert response.status_code == 200
    path = response.json()["profileImage"]
    assert client.get("/api/auth/me", headers=employer["headers"]).json()["profileImage"] == path


def test_profile_image_rejects_documents(client, candidate):
    response = client.post(
        "/api/profiles/upload-profile-image",
        files={"profileImage": ("cv.pdf", b"%PDF", "application/pdf")},
        headers=candidate["headers"],
    )

    assert response.status_code == 400
