"""
AnalyticsService Implementation
Computed in memory on every request; nothing is cached or stored
"""
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List
from uuid import UUID

from application.services.analytics import IAnalyticsService
from application.repositories.interfaces import (
    IApplicationRepository,
    IJobRepository,
    IUserRepository,
)
from domain.entities import Application
from domain.enums import UserRole
from domain.policies import ensure_owner, ensure_role
from domain.value_objects import ApplicationStatus
from core.clock import utcnow
from core.exceptions import AuthenticationException, ResourceNotFoundException
from core.logging_config import logger

TREND_DAYS = 7
RECENT_ACTIVITY_DAYS = 30
TOP_JOBS = 5


def conversion_rate(applications: int, views: int) -> float:
    """Applications per hundred views, 0 when there are no views"""
    if views <= 0:
        return 0.0
    return round(applications / views * 100, 2)


def status_breakdown(applications: Iterable[Application]) -> Dict[str, int]:
    """Count per application status, every status present"""
    counts = Counter(a.status.value for a in applications)
    return {status.value: counts.get(status.value, 0) for status in ApplicationStatus}


class AnalyticsService(IAnalyticsService):
    """Analytics service implementation"""

    def __init__(
        self,
        job_repository: IJobRepository,
        application_repository: IApplicationRepository,
        user_repository: IUserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.job_repo = job_repository
        self.application_repo = application_repository
        self.user_repo = user_repository
        self.clock = clock

    async def job_analytics(self, job_id: UUID, caller_id: UUID) -> Dict[str, Any]:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise ResourceNotFoundException("Job", str(job_id))
        ensure_owner(job, caller_id)

        now = self.clock()
        applications = [d.application for d in await self.application_repo.list_for_job(job_id)]
        total = len(applications)
        days_active = max(1, (now - job.date).days) if job.date else 1

        return {
            "job_id": str(job.id),
            "title": job.title,
            "status": job.effective_status(now).value,
            "views": job.views,
            "total_applications": total,
            "status_breakdown": status_breakdown(applications),
            "daily_trend": self._daily_trend(applications, now),
            "days_active": days_active,
            "views_per_day": round(job.views / days_active, 2),
            "conversion_rate": conversion_rate(total, job.views),
        }

    async def dashboard(self, company_id: UUID) -> Dict[str, Any]:
        company = await self.user_repo.get_by_id(company_id)
        if not company:
            raise AuthenticationException()
        ensure_role(company, UserRole.COMPANY)

        now = self.clock()
        jobs = await self.job_repo.list_by_owner(company_id)
        applications = await self.application_repo.list_for_company(company_id)

        per_job = Counter(str(a.job_id) for a in applications)
        top_jobs = sorted(jobs, key=lambda j: j.views, reverse=True)[:TOP_JOBS]
        since = now - timedelta(days=RECENT_ACTIVITY_DAYS)

        logger.debug(f"Dashboard for {company_id}: {len(jobs)} jobs, {len(applications)} applications")
        return {
            "total_jobs": len(jobs),
            "total_views": sum(j.views for j in jobs),
            "total_applications": len(applications),
            "active_jobs": sum(1 for j in jobs if j.is_active(now)),
            "expired_jobs": sum(1 for j in jobs if j.is_deadline_passed(now)),
            "status_breakdown": status_breakdown(applications),
            "top_jobs": [
                {
                    "id": str(j.id),
                    "title": j.title,
                    "views": j.views,
                    "applications": per_job.get(str(j.id), 0),
                    "conversion_rate": conversion_rate(per_job.get(str(j.id), 0), j.views),
                }
                for j in top_jobs
            ],
            "recent_activity": {
                "days": RECENT_ACTIVITY_DAYS,
                "new_applications": sum(1 for a in applications if a.date and a.date >= since),
                "new_jobs": sum(1 for j in jobs if j.date and j.date >= since),
            },
        }

    @staticmethod
    def _daily_trend(applications: List[Application], now: datetime) -> List[Dict[str, Any]]:
        """Applications per calendar day over the last week, oldest first"""
        per_day = Counter(a.date.date() for a in applications if a.date)
        today = now.date()
        trend = []
        for offset in range(TREND_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            trend.append({"date": day.isoformat(), "count": per_day.get(day, 0)})
        return trend
