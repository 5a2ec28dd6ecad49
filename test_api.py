#!/usr/bin/env python3
"""
End-to-end tests of the HTTP API: a full hire flow plus error status mapping
"""
import pytest

PASSWORD = "secret-pass-1"


async def register(client, email, role, name):
    response = await client.post("/auth/register", json={
        "email": email, "password": PASSWORD, "role": role, "display_name": name,
    })
    assert response.status_code == 200, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


@pytest.fixture
async def acme(client):
    return await register(client, "acme@example.com", "employer", "Acme Labs")


@pytest.fixture
async def sam(client):
    return await register(client, "sam@example.com", "student", "Sam Student")


async def post_job(client, headers, **overrides):
    payload = {
        "title": "Survey data cleanup",
        "description": "Tidy a set of research survey exports",
        "job_type": "project",
        "budget_min": 100,
        "budget_max": 500,
    }
    payload.update(overrides)
    return await client.post("/jobs", json=payload, headers=headers)


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_hire_flow(client, acme, sam):
    acme_headers, acme_user = acme
    sam_headers, sam_user = sam
    assert acme_user["role"] == "employer"
    assert acme_user["display_name"] == "Acme Labs"

    created = await post_job(client, acme_headers)
    assert created.status_code == 201, created.text
    job = created.json()
    assert job["budget_display"] == "$100 - $500"

    listings = (await client.get("/jobs", params={"search": "acme"})).json()
    assert [j["id"] for j in listings] == [job["id"]]
    assert listings[0]["company_name"] == "Acme Labs"

    applied = await client.post("/applications", json={"job_id": job["id"], "cover_letter": "Hi"}, headers=sam_headers)
    assert applied.status_code == 201, applied.text
    application = applied.json()
    assert application["status"] == "pending"

    again = await client.post("/applications", json={"job_id": job["id"]}, headers=sam_headers)
    assert again.status_code == 409

    job_ids = (await client.get("/applications/mine/job-ids", headers=sam_headers)).json()
    assert job_ids == [job["id"]]

    mine = (await client.get("/applications/mine", headers=sam_headers)).json()
    assert mine[0]["company_name"] == "Acme Labs"

    received = (await client.get("/applications/received", headers=acme_headers)).json()
    assert [(r["id"], r["student_name"]) for r in received] == [(application["id"], "Sam Student")]

    accepted = await client.patch(f"/applications/{application['id']}/status",
                                  json={"status": "accepted"}, headers=acme_headers)
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    reverted = await client.patch(f"/applications/{application['id']}/status",
                                  json={"status": "pending"}, headers=acme_headers)
    assert reverted.status_code == 400

    student_summary = (await client.get("/dashboard/summary", headers=sam_headers)).json()
    assert student_summary["applications_sent"] == 1
    assert student_summary["accepted_applications"] == 1

    employer_summary = (await client.get("/dashboard/summary", headers=acme_headers)).json()
    assert employer_summary["open_jobs"] == 1
    assert employer_summary["hired_students"] == 1
    assert employer_summary["recent_jobs"][0]["application_count"] == 1

    actions = {entry["action"] for entry in (await client.get("/logs", headers=acme_headers)).json()}
    assert {"user_signed_up", "job_created", "application_status_changed"} <= actions


async def test_role_and_ownership_errors(client, acme, sam):
    acme_headers, _ = acme
    sam_headers, _ = sam
    globex_headers, _ = await register(client, "globex@example.com", "employer", "Globex")

    assert (await post_job(client, sam_headers)).status_code == 403

    job = (await post_job(client, acme_headers)).json()
    assert (await client.delete(f"/jobs/{job['id']}", headers=globex_headers)).status_code == 403
    assert (await client.patch(f"/jobs/{job['id']}", json={"title": "Mine now"},
                               headers=globex_headers)).status_code == 403
    assert (await client.get(f"/jobs/{job['id']}")).status_code == 200

    assert (await client.delete(f"/jobs/{job['id']}", headers=acme_headers)).status_code == 204
    assert (await client.get(f"/jobs/{job['id']}")).status_code == 404


async def test_invalid_budget_is_a_bad_request(client, acme):
    acme_headers, _ = acme
    response = await post_job(client, acme_headers, budget_min=900, budget_max=100)
    assert response.status_code == 400
    assert "budget" in response.json()["detail"].lower()


async def test_auth_errors(client, acme):
    acme_headers, _ = acme

    duplicate = await client.post("/auth/register", json={
        "email": "acme@example.com", "password": PASSWORD, "role": "student", "display_name": "Copycat",
    })
    assert duplicate.status_code == 400

    wrong = await client.post("/auth/login", json={"email": "acme@example.com", "password": "nope-nope"})
    assert wrong.status_code == 401
    assert wrong.headers["www-authenticate"] == "Bearer"

    assert (await client.get("/auth/me")).status_code == 401

    me = await client.get("/auth/me", headers=acme_headers)
    assert me.json()["role"] == "employer"

    assert (await client.post("/auth/logout", headers=acme_headers)).status_code == 200
    assert (await client.get("/auth/me", headers=acme_headers)).status_code == 401

    login = await client.post("/auth/login", json={"email": "ACME@example.com", "password": PASSWORD})
    assert login.status_code == 200
    assert login.json()["user"]["display_name"] == "Acme Labs"


async def test_profile_endpoints(client, sam):
    sam_headers, sam_user = sam

    profile = (await client.get("/profiles/me", headers=sam_headers)).json()
    assert profile["full_name"] == "Sam Student"

    patched = await client.patch("/profiles/me", json={"university": "State University"}, headers=sam_headers)
    assert patched.status_code == 200
    assert patched.json()["university"] == "State University"

    assert (await client.post("/profiles/me", json={"full_name": "Again"}, headers=sam_headers)).status_code == 409

    uploaded = await client.post("/profiles/me/resume", headers=sam_headers,
                                 files={"file": ("cv.pdf", b"%PDF-1.4 test", "application/pdf")})
    assert uploaded.status_code == 200, uploaded.text
    assert uploaded.json()["resume_url"].endswith(f"/files/resumes/{sam_user['id']}/resume.pdf")

    rejected = await client.post("/profiles/me/resume", headers=sam_headers,
                                 files={"file": ("cv.exe", b"MZ", "application/octet-stream")})
    assert rejected.status_code == 400


async def test_register_rejects_password_over_72_bytes(client):
    response = await client.post("/auth/register", json={
        "email": "sam@example.com", "password": "é" * 40, "role": "student", "display_name": "Sam Student",
    })
    assert response.status_code == 422
