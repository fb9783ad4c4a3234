"""
Tests for domain rules, value objects and request normalization
"""
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from core.clock import as_datetime, as_upper_bound
from core.exceptions import (
    AuthorizationException,
    DeadlinePassedException,
    ForbiddenException,
    InvalidStateException,
)
from domain.entities import Application, Job, User
from domain.enums import JobType, WorkMode, UserRole, parse_enum
from domain.policies import (
    ensure_accepting_applications,
    ensure_owner,
    ensure_owns_all,
    ensure_reopenable,
    ensure_role,
)
from domain.value_objects import Benefits, Email, JobStatus, SalaryRange
from presentation.api.v1.schemas.job import JobRequest


NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_job(**overrides) -> Job:
    values = dict(
        id=uuid4(),
        user_id=uuid4(),
        title="Data Analyst",
        company="Acme",
        location="Mbabane",
        description="Crunch numbers",
        deadline=NOW + timedelta(days=1),
    )
    values.update(overrides)
    return Job(**values)


class TestJobStatus:

    @pytest.mark.parametrize("value, expected", [
        (None, JobStatus.PUBLISHED),
        ("", JobStatus.PUBLISHED),
        ("draft", JobStatus.DRAFT),
        ("Active", JobStatus.ACTIVE),
        ("live", JobStatus.PUBLISHED),
        ("inactive", JobStatus.PAUSED),
        ("expired", JobStatus.PUBLISHED),
        ("archived", JobStatus.PUBLISHED),
    ])
    def test_from_input(self, value, expected):
        assert JobStatus.from_input(value) == expected

    def test_only_published_and_active_are_listed(self):
        listed = {s for s in JobStatus if s.is_listed}
        assert listed == {JobStatus.PUBLISHED, JobStatus.ACTIVE}


class TestParseEnum:

    def test_normalizes_case_and_separators(self):
        assert parse_enum(JobType, "Full_Time", JobType.CONTRACT) == JobType.FULL_TIME
        assert parse_enum(WorkMode, "on site", WorkMode.REMOTE) == WorkMode.ON_SITE

    def test_blank_uses_default(self):
        assert parse_enum(JobType, "  ", JobType.CONTRACT) == JobType.CONTRACT

    def test_unknown_value_raises(self):
        with pytest.raises(ValueError, match="must be one of"):
            parse_enum(JobType, "gig", JobType.FULL_TIME)


class TestValueObjects:

    def test_benefit_slugs_set_flags_and_keep_unknown(self):
        benefits = Benefits.from_slugs(["health-insurance", "Flexible Hours", "free lunch", ""])
        assert benefits.health_insurance is True
        assert benefits.flexible_hours is True
        assert benefits.remote_work is False
        assert benefits.other == ["free lunch"]

    def test_benefits_dict_roundtrip_keeps_every_flag(self):
        data = Benefits(paid_time_off=True, other=["bonus"]).to_dict()
        assert set(data) == set(Benefits.flag_names()) | {"other"}
        assert Benefits.from_dict(data).paid_time_off is True

    def test_salary_min_above_max_rejected(self):
        with pytest.raises(ValueError):
            SalaryRange(min_salary=5000, max_salary=1000)

    def test_email_is_lower_cased(self):
        assert str(Email("  Someone@Example.COM ")) == "someone@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            Email("not-an-email")


class TestJobEntity:

    def test_expired_is_derived_from_deadline(self):
        job = make_job(status=JobStatus.ACTIVE, deadline=NOW - timedelta(seconds=1))
        assert job.effective_status(NOW) == JobStatus.EXPIRED
        assert job.status == JobStatus.ACTIVE

    def test_visibility(self):
        assert make_job(status=JobStatus.PUBLISHED).is_publicly_visible(NOW)
        assert not make_job(status=JobStatus.DRAFT).is_publicly_visible(NOW)
        assert not make_job(deadline=NOW - timedelta(days=1)).is_publicly_visible(NOW)

    def test_deadline_equal_to_now_is_still_open(self):
        job = make_job(deadline=NOW)
        assert not job.is_deadline_passed(NOW)
        assert job.is_publicly_visible(NOW)

    def test_empty_title_rejected(self):
        with pytest.raises(ValueError):
            make_job(title="  ")


class TestPolicies:

    def test_ensure_owner(self):
        job = make_job()
        ensure_owner(job, job.user_id)
        ensure_owner(job, str(job.user_id))
        with pytest.raises(AuthorizationException):
            ensure_owner(job, uuid4())

    def test_ensure_role(self):
        user = User(id=uuid4(), name="Sipho", email=Email("sipho@example.com"), password_hash="x")
        ensure_role(user, UserRole.SEEKER)
        with pytest.raises(ForbiddenException):
            ensure_role(user, UserRole.COMPANY)

    def test_ensure_owns_all_rejects_mixed_batch(self):
        company = uuid4()
        owned = Application(id=uuid4(), job_id=uuid4(), applicant_id=uuid4(), company_id=company)
        foreign = Application(id=uuid4(), job_id=uuid4(), applicant_id=uuid4(), company_id=uuid4())
        ensure_owns_all([owned], company)
        with pytest.raises(AuthorizationException):
            ensure_owns_all([owned, foreign], company)

    def test_deadline_rules(self):
        passed = make_job(deadline=NOW - timedelta(minutes=1))
        with pytest.raises(DeadlinePassedException) as exc:
            ensure_accepting_applications(passed, NOW)
        assert exc.value.reason == "DeadlinePassed"

        with pytest.raises(InvalidStateException) as exc:
            ensure_reopenable(passed, NOW)
        assert exc.value.reason == "DeadlineExpired"

        ensure_reopenable(make_job(), NOW)


class TestClock:

    def test_date_becomes_midnight(self):
        assert as_datetime(date(2026, 5, 1)) == datetime(2026, 5, 1)

    def test_aware_datetime_becomes_naive_utc(self):
        aware = datetime(2026, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert as_datetime(aware) == datetime(2026, 5, 1, 12, 0)

    def test_rejects_other_values(self):
        with pytest.raises(ValueError):
            as_datetime("tomorrow")

    def test_upper_bound_covers_the_whole_of_a_bare_date(self):
        bound = as_upper_bound(date(2026, 5, 1))
        assert datetime(2026, 5, 1, 23, 59, 59) < bound < datetime(2026, 5, 2)
        assert as_upper_bound(datetime(2026, 5, 1, 9, 30)) == datetime(2026, 5, 1, 9, 30)


class TestJobRequestAliases:

    def test_camel_case_and_legacy_names(self):
        request = JobRequest.model_validate({
            "jobTitle": "Nurse",
            "workLocation": "Manzini",
            "companyName": "Clinic",
            "description": "Care for patients",
            "applicationDeadline": "2030-01-31",
            "jobType": "part-time",
            "workMode": "remote",
            "experienceLevel": "senior-level",
            "salaryMin": "",
            "salaryMax": 9000,
            "salaryCurrency": "zar",
            "salaryPeriod": "hourly",
            "contactEmail": "jobs@example.com",
            "isEasyApply": False,
            "isUrgent": True,
            "skills": "triage, first aid",
            "unexpected": "ignored",
        })
        draft = request.to_draft()

        assert draft.title == "Nurse"
        assert draft.location == "Manzini"
        assert draft.company == "Clinic"
        assert as_datetime(draft.deadline) == datetime(2030, 1, 31)
        assert draft.job_type == "part-time"
        assert draft.work_mode == "remote"
        assert draft.experience_level == "senior-level"
        assert draft.salary_min is None
        assert draft.salary_max == 9000
        assert draft.salary_currency == "zar"
        assert draft.salary_period == "hourly"
        assert draft.contact_email == "jobs@example.com"
        assert draft.is_easy_apply is False
        assert draft.is_urgent is True
        assert draft.skills == ["triage", "first aid"]

    def test_canonical_names(self):
        draft = JobRequest(title="Chef", description="Cook", deadline="2030-01-01").to_draft()
        assert draft.title == "Chef"
        assert draft.status is None
