"""
End-to-end tests through the HTTP layer
"""
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from core.clock import utcnow


def job_payload(**overrides) -> dict:
    payload = {
        "jobTitle": "Backend Developer",
        "description": "Build and run our APIs",
        "workLocation": "Mbabane",
        "applicationDeadline": (utcnow() + timedelta(days=14)).isoformat(),
        "jobType": "full-time",
        "workMode": "remote",
        "benefits": ["health-insurance"],
    }
    payload.update(overrides)
    return payload


async def post_job(client, headers, **overrides) -> dict:
    response = await client.post("/api/v1/jobs", json=job_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.get("/api/v1/users/me")

        assert response.status_code == 401
        assert response.json() == {"error": {"kind": "Unauthenticated", "message": "Not authorized"}}

    @pytest.mark.asyncio
    async def test_bad_token(self, client):
        response = await client.get("/api/v1/users/me", headers={"x-auth-token": "garbage"})
        assert response.status_code == 401
        assert response.json()["error"]["kind"] == "Unauthenticated"

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, client):
        response = await client.get("/api/v1/jobs/not-a-uuid")

        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NotFound"

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get(f"/api/v1/jobs/{uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_body_validation(self, client):
        response = await client.post("/api/v1/auth/register", json={"name": "X", "password": "1"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["kind"] == "ValidationFailed"
        assert {"email", "password"} <= set(error["fields"])

    @pytest.mark.asyncio
    async def test_missing_job_fields(self, client, register):
        _, company = await register("company")

        response = await client.post("/api/v1/jobs", json={"jobType": "full-time"}, headers=company)

        assert response.status_code == 400
        fields = response.json()["error"]["fields"]
        assert set(fields) == {"title", "description", "deadline"}

    @pytest.mark.asyncio
    async def test_invalid_list_filter(self, client):
        response = await client.get("/api/v1/jobs", params={"work_mode": "space"})

        assert response.status_code == 400
        assert "work_mode" in response.json()["error"]["fields"]

    @pytest.mark.asyncio
    async def test_duplicate_registration(self, client, register):
        await register("seeker")
        response = await client.post("/api/v1/auth/register", json={
            "name": "Again",
            "email": "api-seeker1@example.com",
            "password": "secret123",
        })

        assert response.status_code == 400
        assert response.json()["error"]["reason"] == "DuplicateEmail"

    @pytest.mark.asyncio
    async def test_seeker_cannot_post_jobs(self, client, register):
        _, seeker = await register("seeker")
        response = await client.post("/api/v1/jobs", json=job_payload(), headers=seeker)

        assert response.status_code == 403
        assert response.json()["error"]["kind"] == "Forbidden"


class TestAuthFlow:

    @pytest.mark.asyncio
    async def test_login_and_me(self, client, register):
        user_id, _ = await register("company", name="Acme")

        response = await client.post("/api/v1/auth/login", json={
            "email": "api-company1@example.com",
            "password": "secret123",
        })
        assert response.status_code == 200
        token = response.json()["token"]

        me = await client.get("/api/v1/users/me", headers={"x-auth-token": token})
        assert me.status_code == 200
        body = me.json()
        assert body["id"] == user_id
        assert body["name"] == "Acme"
        assert body["role"] == "company"
        assert "password_hash" not in body

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, register):
        await register("seeker")
        response = await client.post("/api/v1/auth/login", json={
            "email": "api-seeker1@example.com",
            "password": "nope-nope",
        })
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"


class TestJobLifecycle:

    @pytest.mark.asyncio
    async def test_deadline_update_hides_job_from_public_list(self, client, register):
        _, company = await register("company", name="Acme")
        job = await post_job(client, company)

        public = (await client.get("/api/v1/jobs")).json()
        assert [j["id"] for j in public] == [job["id"]]
        assert job["company"] == "Acme"
        assert job["status"] == "published"
        assert job["benefits"]["health_insurance"] is True

        expired = job_payload(applicationDeadline=(utcnow() - timedelta(days=1)).isoformat())
        response = await client.put(f"/api/v1/jobs/{job['id']}", json=expired, headers=company)
        assert response.status_code == 200
        assert response.json()["status"] == "expired"

        assert (await client.get("/api/v1/jobs")).json() == []
        mine = (await client.get("/api/v1/jobs/myjobs", headers=company)).json()
        assert [j["id"] for j in mine] == [job["id"]]

    @pytest.mark.asyncio
    async def test_foreign_company_cannot_edit(self, client, register):
        _, owner = await register("company")
        _, rival = await register("company")
        job = await post_job(client, owner)

        response = await client.put(f"/api/v1/jobs/{job['id']}", json=job_payload(jobTitle="Mine now"), headers=rival)

        assert response.status_code == 401
        assert response.json()["error"]["kind"] == "Unauthorized"
        assert (await client.get(f"/api/v1/jobs/{job['id']}")).json()["title"] == "Backend Developer"

    @pytest.mark.asyncio
    async def test_close_reopen_delete(self, client, register):
        _, company = await register("company")
        job = await post_job(client, company)

        closed = await client.patch(f"/api/v1/jobs/{job['id']}/close", headers=company)
        assert closed.json()["status"] == "closed"
        assert (await client.get("/api/v1/jobs")).json() == []

        reopened = await client.patch(f"/api/v1/jobs/{job['id']}/reopen", headers=company)
        assert reopened.json()["status"] == "published"

        deleted = await client.delete(f"/api/v1/jobs/{job['id']}", headers=company)
        assert deleted.json() == {"message": "Job removed successfully"}
        assert (await client.get(f"/api/v1/jobs/{job['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_viewing_a_job_counts_a_view(self, client, register):
        _, company = await register("company")
        job = await post_job(client, company)

        await client.get(f"/api/v1/jobs/{job['id']}")
        await client.get(f"/api/v1/jobs/{job['id']}")

        mine = (await client.get("/api/v1/jobs/myjobs", headers=company)).json()
        assert mine[0]["views"] == 2


class TestApplying:

    @pytest.mark.asyncio
    async def test_apply_with_uploaded_document(self, client, register):
        _, company = await register("company")
        _, seeker = await register("seeker", name="Zanele")
        job = await post_job(client, company)

        uploaded = await client.post(
            "/api/v1/users/documents",
            files={"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")},
            headers=seeker,
        )
        assert uploaded.status_code == 200, uploaded.text
        document = uploaded.json()["documents"][0]

        response = await client.post(
            f"/api/v1/jobs/{job['id']}/apply",
            json={"coverLetter": "I build APIs", "documentIds": [document["id"]]},
            headers=seeker,
        )
        assert response.status_code == 201, response.text
        application = response.json()
        assert application["status"] == "pending"
        assert application["attached_documents"] == [
            {"original_name": "cv.pdf", "file_path": document["file_path"]}
        ]

        refreshed = (await client.get("/api/v1/jobs/myjobs", headers=company)).json()[0]
        assert refreshed["application_count"] == 1

        again = await client.post(f"/api/v1/jobs/{job['id']}/apply", json={}, headers=seeker)
        assert again.status_code == 400
        assert again.json()["error"] == {
            "kind": "InvalidState",
            "message": "You have already applied for this job",
            "reason": "DuplicateApplication",
        }

        mine = (await client.get("/api/v1/applications/my-applications", headers=seeker)).json()
        assert mine[0]["job"]["title"] == "Backend Developer"

    @pytest.mark.asyncio
    async def test_unknown_document_ids_are_ignored(self, client, register):
        _, company = await register("company")
        _, seeker = await register("seeker")
        job = await post_job(client, company)

        response = await client.post(
            f"/api/v1/jobs/{job['id']}/apply",
            json={"document_ids": ["missing"]},
            headers=seeker,
        )
        assert response.status_code == 201
        assert response.json()["attached_documents"] == []

    @pytest.mark.asyncio
    async def test_review_and_export(self, client, register):
        _, company = await register("company")
        _, seeker = await register("seeker", name="Zanele")
        job = await post_job(client, company)
        applied = await client.post(
            f"/api/v1/jobs/{job['id']}/apply",
            json={"cover_letter": "Line one\nLine two"},
            headers=seeker,
        )
        application_id = applied.json()["id"]

        listing = await client.get(
            f"/api/v1/applications/job/{job['id']}",
            params={"status": "pending", "sort_by": "name", "order": "asc"},
            headers=company,
        )
        assert listing.status_code == 200
        body = listing.json()
        assert body["pagination"] == {"total": 1, "page": 1, "limit": 20, "pages": 1}
        assert body["applications"][0]["applicant"]["name"] == "Zanele"

        updated = await client.put(
            f"/api/v1/applications/{application_id}", json={"status": "successful"}, headers=company
        )
        assert updated.json()["status"] == "successful"

        noted = await client.post(
            "/api/v1/applications/bulk-notes",
            json={"applicationIds": [application_id, application_id], "notes": "Call back"},
            headers=company,
        )
        assert noted.json() == {"message": "Added notes to 1 applications", "modified_count": 1}

        export = await client.get(f"/api/v1/applications/export/csv/{job['id']}", headers=company)
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        assert export.headers["content-disposition"] == f'attachment; filename="applications-{job["id"]}.csv"'
        lines = export.text.splitlines()
        assert lines[0].startswith('"Name","Email","Headline"')
        assert "Line one Line two" in lines[1]
        assert "Call back" in lines[1]

        seeker_export = await client.get(f"/api/v1/applications/export/csv/{job['id']}", headers=seeker)
        assert seeker_export.status_code == 401

    @pytest.mark.asyncio
    async def test_bare_date_range_includes_the_whole_day(self, client, register):
        _, company = await register("company")
        _, seeker = await register("seeker")
        job = await post_job(client, company)
        await client.post(f"/api/v1/jobs/{job['id']}/apply", json={}, headers=seeker)
        today = utcnow().date().isoformat()

        listing = await client.get(
            f"/api/v1/applications/job/{job['id']}",
            params={"date_from": today, "date_to": today},
            headers=company,
        )
        assert listing.status_code == 200, listing.text
        assert listing.json()["pagination"]["total"] == 1

        malformed = await client.get(
            f"/api/v1/applications/job/{job['id']}", params={"date_to": "yesterday"}, headers=company
        )
        assert malformed.status_code == 400
        assert malformed.json()["error"]["fields"] == {"date_to": "must be an ISO date or datetime"}

    @pytest.mark.asyncio
    async def test_invalid_status(self, client, register):
        _, company = await register("company")
        _, seeker = await register("seeker")
        job = await post_job(client, company)
        applied = await client.post(f"/api/v1/jobs/{job['id']}/apply", json={}, headers=seeker)

        response = await client.put(
            f"/api/v1/applications/{applied.json()['id']}", json={"status": "hired"}, headers=company
        )
        assert response.status_code == 400
        assert response.json()["error"]["kind"] == "ValidationFailed"


class TestProfilesAndMessages:

    @pytest.mark.asyncio
    async def test_public_profile_hides_private_fields(self, client, register):
        user_id, seeker = await register("seeker")
        _, other = await register("seeker")
        await client.post("/api/v1/users/skills", json={"name": "Python"}, headers=seeker)

        own = (await client.get(f"/api/v1/users/{user_id}", headers=seeker)).json()
        foreign = (await client.get(f"/api/v1/users/{user_id}", headers=other)).json()

        assert own["is_owner"] is True
        assert foreign["is_owner"] is False
        assert foreign["documents"] is None
        assert [s["name"] for s in foreign["skills"]] == ["Python"]

        duplicate = await client.post("/api/v1/users/skills", json={"name": "python"}, headers=seeker)
        assert duplicate.status_code == 400
        assert duplicate.json()["error"]["reason"] == "DuplicateSkill"

    @pytest.mark.asyncio
    async def test_experience_education_completion_and_search(self, client, register):
        user_id, seeker = await register("seeker", name="Nomsa")

        added = await client.post(
            "/api/v1/users/experience",
            json={"title": "Analyst", "company": "Acme", "from": "2024-01-01"},
            headers=seeker,
        )
        experience_id = added.json()["experience"][0]["id"]

        edited = await client.put(
            f"/api/v1/users/experience/{experience_id}",
            json={"title": "Lead Analyst", "current": True},
            headers=seeker,
        )
        assert edited.status_code == 200, edited.text
        assert edited.json()["experience"][0]["title"] == "Lead Analyst"
        assert edited.json()["experience"][0]["company"] == "Acme"

        missing = await client.put(
            "/api/v1/users/experience/nope", json={"title": "CTO"}, headers=seeker
        )
        assert missing.status_code == 404

        education = await client.post(
            "/api/v1/users/education",
            json={"school": "UNESWA", "degree": "BSc", "fieldOfStudy": "Statistics", "startDate": "2018-02-01"},
            headers=seeker,
        )
        assert education.status_code == 200, education.text
        assert education.json()["education"][0]["field_of_study"] == "Statistics"

        completion = await client.get("/api/v1/users/profile-completion", headers=seeker)
        assert completion.status_code == 200
        assert completion.json()["completed"] == 3
        assert completion.json()["total"] == 9

        found = await client.get("/api/v1/users/search", params={"q": "noms"}, headers=seeker)
        assert found.status_code == 200
        assert [u["id"] for u in found.json()["users"]] == [user_id]

        blank = await client.get("/api/v1/users/search", headers=seeker)
        assert blank.status_code == 400
        assert "q" in blank.json()["error"]["fields"]

    @pytest.mark.asyncio
    async def test_uploaded_file_is_served_inline(self, client, register):
        user_id, seeker = await register("seeker")
        uploaded = await client.post(
            "/api/v1/users/documents",
            files={"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")},
            headers=seeker,
        )
        stored_name = Path(uploaded.json()["documents"][0]["file_path"]).name

        served = await client.get(f"/api/v1/files/{user_id}/{stored_name}")
        assert served.status_code == 200
        assert served.content == b"%PDF-1.4 resume"
        assert served.headers["content-disposition"].startswith("inline")

        missing = await client.get(f"/api/v1/files/{user_id}/nothing.pdf")
        assert missing.status_code == 404
        assert missing.json()["error"]["kind"] == "NotFound"

    @pytest.mark.asyncio
    async def test_message_flow(self, client, register):
        alice_id, alice = await register("seeker", name="Alice")
        acme_id, acme = await register("company", name="Acme")

        sent = await client.post(f"/api/v1/messages/{acme_id}", json={"content": "Hello"}, headers=alice)
        assert sent.status_code == 201
        assert sent.json()["is_read"] is False

        unread = await client.get("/api/v1/messages/unread-count", headers=acme)
        assert unread.json() == {"unread_count": 1}

        conversations = (await client.get("/api/v1/messages/conversations", headers=acme)).json()
        assert conversations[0]["with_user"]["id"] == alice_id
        assert conversations[0]["unread_count"] == 1

        thread = (await client.get(f"/api/v1/messages/conversation/{alice_id}", headers=acme)).json()
        assert [m["content"] for m in thread] == ["Hello"]
        assert (await client.get("/api/v1/messages/unread-count", headers=acme)).json() == {"unread_count": 0}

        empty = await client.post(f"/api/v1/messages/{acme_id}", json={"content": " "}, headers=alice)
        assert empty.status_code == 400

        nobody = await client.post(f"/api/v1/messages/{uuid4()}", json={"content": "hi"}, headers=alice)
        assert nobody.status_code == 404


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "ok", "cache": "disabled"}
