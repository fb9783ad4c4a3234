"""
Tests for applying, the company review workflow, bulk updates and CSV export
"""
import csv
import io
from dataclasses import replace
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from application.services.applications import ApplicationFilter
from core.exceptions import (
    AuthorizationException,
    DeadlinePassedException,
    DuplicateApplicationException,
    ForbiddenException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.entities import Application, Document, Experience, Skill
from domain.enums import UserRole
from domain.value_objects import ApplicationStatus
from infrastructure.services.application_service import CSV_HEADER, flatten_text


@pytest.fixture
def setup(make_user, make_job):
    """Company with one open job and a factory for seekers"""

    async def _setup():
        company = await make_user(UserRole.COMPANY, name="Acme")
        job = await make_job(company.id)
        return company, job

    return _setup


class TestApply:

    @pytest.mark.asyncio
    async def test_snapshot_of_selected_documents_and_counter(
        self, setup, make_user, user_repo, job_repo, application_service
    ):
        company, job = await setup()
        seeker = await make_user()
        cv = Document(original_name="cv.pdf", file_path="uploads/x/cv.pdf")
        letter = Document(original_name="letter.pdf", file_path="uploads/x/letter.pdf")
        await user_repo.update(replace(seeker, documents=[cv, letter]))

        application = await application_service.apply(
            job.id, seeker.id, cover_letter="Hire me", document_ids=[cv.id, "unknown-id"]
        )

        assert application.status == ApplicationStatus.PENDING
        assert application.company_id == company.id
        assert application.cover_letter == "Hire me"
        assert [d.to_dict() for d in application.attached_documents] == [
            {"original_name": "cv.pdf", "file_path": "uploads/x/cv.pdf"}
        ]
        assert (await job_repo.get_by_id(job.id)).application_count == 1

    @pytest.mark.asyncio
    async def test_second_application_rejected(self, setup, make_user, job_repo, application_service):
        _, job = await setup()
        seeker = await make_user()
        await application_service.apply(job.id, seeker.id)

        with pytest.raises(DuplicateApplicationException) as exc:
            await application_service.apply(job.id, seeker.id)

        assert exc.value.reason == "DuplicateApplication"
        assert (await job_repo.get_by_id(job.id)).application_count == 1

    @pytest.mark.asyncio
    async def test_deadline_checked_before_role(self, setup, make_user, make_job, application_service, clock):
        company, _ = await setup()
        expired = await make_job(company.id, deadline=clock() - timedelta(minutes=1))
        other_company = await make_user(UserRole.COMPANY)

        with pytest.raises(DeadlinePassedException):
            await application_service.apply(expired.id, other_company.id)

    @pytest.mark.asyncio
    async def test_company_cannot_apply(self, setup, make_user, application_service):
        _, job = await setup()
        other_company = await make_user(UserRole.COMPANY)

        with pytest.raises(ForbiddenException):
            await application_service.apply(job.id, other_company.id)

    @pytest.mark.asyncio
    async def test_missing_job(self, make_user, application_service):
        seeker = await make_user()
        with pytest.raises(ResourceNotFoundException):
            await application_service.apply(uuid4(), seeker.id)

    @pytest.mark.asyncio
    async def test_unique_constraint_backs_the_precheck(self, setup, make_user, session, application_repo):
        company, job = await setup()
        seeker = await make_user()
        first = Application(id=uuid4(), job_id=job.id, applicant_id=seeker.id, company_id=company.id)
        await application_repo.create(first)
        await session.commit()

        with pytest.raises(DuplicateApplicationException):
            await application_repo.create(replace(first, id=uuid4()))

        assert await application_repo.exists_for_job(job.id, seeker.id)


class TestReview:

    @pytest.mark.asyncio
    async def test_update_status_and_notes(self, setup, make_user, application_service):
        company, job = await setup()
        seeker = await make_user()
        application = await application_service.apply(job.id, seeker.id)

        updated = await application_service.update_status(application.id, company.id, "Viewed")
        assert updated.status == ApplicationStatus.VIEWED

        noted = await application_service.set_notes(application.id, company.id, "Call back")
        assert noted.company_notes == "Call back"
        assert noted.status == ApplicationStatus.VIEWED

    @pytest.mark.asyncio
    async def test_invalid_status(self, setup, make_user, application_service):
        company, job = await setup()
        seeker = await make_user()
        application = await application_service.apply(job.id, seeker.id)

        with pytest.raises(ValidationException) as exc:
            await application_service.update_status(application.id, company.id, "hired")
        assert "status" in exc.value.errors

    @pytest.mark.asyncio
    async def test_only_owning_company_reviews(self, setup, make_user, application_service):
        _, job = await setup()
        seeker = await make_user()
        intruder = await make_user(UserRole.COMPANY)
        application = await application_service.apply(job.id, seeker.id)

        with pytest.raises(AuthorizationException):
            await application_service.update_status(application.id, intruder.id, "successful")
        with pytest.raises(AuthorizationException):
            await application_service.set_notes(application.id, intruder.id, "mine now")
        with pytest.raises(AuthorizationException):
            await application_service.list_for_job(job.id, intruder.id)

    @pytest.mark.asyncio
    async def test_missing_application(self, make_user, application_service):
        company = await make_user(UserRole.COMPANY)
        with pytest.raises(ResourceNotFoundException):
            await application_service.update_status(uuid4(), company.id, "viewed")


class TestListForJob:

    @pytest.fixture
    def populated(self, setup, make_user, application_service):
        async def _populated():
            company, job = await setup()
            names = ["Zanele", "Andile", "Musa"]
            applications = []
            for name in names:
                seeker = await make_user(name=name)
                applications.append(await application_service.apply(
                    job.id, seeker.id, cover_letter=f"{name} knows Python" if name == "Musa" else None
                ))
            await application_service.update_status(applications[1].id, company.id, "successful")
            return company, job, applications

        return _populated

    @pytest.mark.asyncio
    async def test_default_is_newest_first(self, populated, application_service):
        company, job, applications = await populated()

        page = await application_service.list_for_job(job.id, company.id)

        assert [d.application.id for d in page.items] == [a.id for a in reversed(applications)]
        assert (page.total, page.page, page.limit, page.pages) == (3, 1, 20, 1)
        assert page.items[0].applicant.name == "Musa"

    @pytest.mark.asyncio
    async def test_status_filter_search_and_sort(self, populated, application_service):
        company, job, _ = await populated()

        successful = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(status="successful")
        )
        assert [d.applicant.name for d in successful.items] == ["Andile"]

        by_letter = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(search="PYTHON")
        )
        assert [d.applicant.name for d in by_letter.items] == ["Musa"]

        by_name = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(sort_by="name", order="asc")
        )
        assert [d.applicant.name for d in by_name.items] == ["Andile", "Musa", "Zanele"]

    @pytest.mark.asyncio
    async def test_pagination_counts_filtered_set(self, populated, application_service):
        company, job, _ = await populated()

        page = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(sort_by="name", order="asc", page=2, limit=2)
        )

        assert [d.applicant.name for d in page.items] == ["Zanele"]
        assert (page.total, page.pages) == (3, 2)

    @pytest.mark.asyncio
    async def test_date_range(self, populated, application_service, clock):
        company, job, _ = await populated()

        future = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(date_from=clock() + timedelta(days=1))
        )
        assert future.total == 0
        assert future.pages == 0

        today = clock().date()
        same_day = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(date_from=today, date_to=today)
        )
        assert same_day.total == 3

        before_today = await application_service.list_for_job(
            job.id, company.id, ApplicationFilter(date_to=today - timedelta(days=1))
        )
        assert before_today.total == 0

    @pytest.mark.asyncio
    async def test_bad_filter_values(self, populated, application_service):
        company, job, _ = await populated()

        with pytest.raises(ValidationException) as exc:
            await application_service.list_for_job(
                job.id, company.id, ApplicationFilter(sort_by="salary", order="up", page=0, limit=500)
            )
        assert set(exc.value.errors) == {"sort_by", "order", "page", "limit"}


class TestBulk:

    @pytest.mark.asyncio
    async def test_bulk_status_for_owned_applications(self, setup, make_user, application_service, application_repo):
        company, job = await setup()
        ids = []
        for _ in range(3):
            seeker = await make_user()
            ids.append((await application_service.apply(job.id, seeker.id)).id)

        modified = await application_service.bulk_update_status(
            [str(i) for i in ids] + [str(ids[0])], company.id, "unsuccessful"
        )

        assert modified == 3
        for application in await application_repo.get_by_ids(ids):
            assert application.status == ApplicationStatus.UNSUCCESSFUL

    @pytest.mark.asyncio
    async def test_mixed_ownership_changes_nothing(
        self, setup, make_user, make_job, application_service, application_repo
    ):
        company, job = await setup()
        rival = await make_user(UserRole.COMPANY)
        rival_job = await make_job(rival.id)
        seeker = await make_user()
        mine = await application_service.apply(job.id, seeker.id)
        theirs = await application_service.apply(rival_job.id, seeker.id)

        with pytest.raises(AuthorizationException):
            await application_service.bulk_update_status([str(mine.id), str(theirs.id)], company.id, "successful")
        with pytest.raises(AuthorizationException):
            await application_service.bulk_set_notes([str(mine.id), str(theirs.id)], company.id, "note")

        for application in await application_repo.get_by_ids([mine.id, theirs.id]):
            assert application.status == ApplicationStatus.PENDING
            assert application.company_notes == ""

    @pytest.mark.asyncio
    async def test_bulk_notes(self, setup, make_user, application_service, application_repo):
        company, job = await setup()
        seeker = await make_user()
        application = await application_service.apply(job.id, seeker.id)

        assert await application_service.bulk_set_notes([str(application.id)], company.id, "Shortlist") == 1
        assert (await application_repo.get_by_id(application.id)).company_notes == "Shortlist"

    @pytest.mark.asyncio
    async def test_empty_and_unknown_ids(self, make_user, application_service):
        company = await make_user(UserRole.COMPANY)

        with pytest.raises(ValidationException):
            await application_service.bulk_update_status([], company.id, "viewed")
        with pytest.raises(ResourceNotFoundException):
            await application_service.bulk_update_status([str(uuid4())], company.id, "viewed")
        with pytest.raises(ResourceNotFoundException):
            await application_service.bulk_set_notes(["not-a-uuid"], company.id, "x")


class TestExportCsv:

    def test_flatten_text(self):
        assert flatten_text('say "hi"\r\nthere') == "say  hi   there"
        assert flatten_text(None) == ""

    @pytest.mark.asyncio
    async def test_header_plus_one_row_per_application(self, setup, make_user, user_repo, application_service):
        company, job = await setup()

        first = await make_user(name="Thandi")
        await user_repo.update(replace(
            first,
            headline="Data Engineer",
            skills=[Skill(name="SQL"), Skill(name="Python")],
            experience=[Experience(title="Analyst", company="Bank", from_date=datetime(2020, 1, 1))],
        ))
        application = await application_service.apply(
            job.id, first.id, cover_letter='He said "hi"\nbye'
        )
        await application_service.set_notes(application.id, company.id, "Strong\r\ncandidate")

        second = await make_user(name="Bongani")
        await application_service.apply(job.id, second.id, cover_letter="x" * 150)

        content = await application_service.export_csv(job.id, company.id)

        lines = content.strip().split("\n")
        assert len(lines) == 3
        assert lines[0] == ",".join(f'"{h}"' for h in CSV_HEADER)

        rows = {row[0]: row for row in csv.reader(io.StringIO(content))}
        thandi = rows["Thandi"]
        assert thandi[2] == "Data Engineer"
        assert thandi[4] == "pending"
        assert thandi[5] == application.date.strftime("%Y-%m-%d")
        assert thandi[6] == "1"
        assert thandi[7] == "SQL; Python"
        assert thandi[8] == "He said  hi  bye"
        assert thandi[9] == "Strong  candidate"
        assert '"He said  hi  bye"' in content

        assert rows["Bongani"][8] == "x" * 100

    @pytest.mark.asyncio
    async def test_owner_only_and_missing_job(self, setup, make_user, application_service):
        _, job = await setup()
        intruder = await make_user(UserRole.COMPANY)

        with pytest.raises(AuthorizationException):
            await application_service.export_csv(job.id, intruder.id)
        with pytest.raises(ResourceNotFoundException):
            await application_service.export_csv(uuid4(), intruder.id)


class TestApplicantView:

    @pytest.mark.asyncio
    async def test_own_applications_survive_job_deletion(
        self, setup, make_user, make_job, job_service, application_service
    ):
        company, job = await setup()
        second_job = await make_job(company.id, title="Designer")
        seeker = await make_user()
        await application_service.apply(job.id, seeker.id)
        await application_service.apply(second_job.id, seeker.id)

        await job_service.delete(second_job.id, company.id)
        mine = await application_service.list_for_applicant(seeker.id)

        assert len(mine) == 2
        assert mine[0].job is None
        assert mine[1].job.title == job.title
