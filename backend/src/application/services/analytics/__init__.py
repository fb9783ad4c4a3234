"""
Analytics Service Interface
Per-job statistics and the company dashboard
"""
from abc import ABC, abstractmethod
from typing import Any, Dict
from uuid import UUID


class IAnalyticsService(ABC):
    """Analytics service interface"""

    @abstractmethod
    async def job_analytics(self, job_id: UUID, caller_id: UUID) -> Dict[str, Any]:
        """
        Status breakdown, 7-day trend, views per day and conversion rate

        Raises:
            ResourceNotFoundException: job does not exist
            AuthorizationException: caller does not own the job
        """
        pass

    @abstractmethod
    async def dashboard(self, company_id: UUID) -> Dict[str, Any]:
        """
        Aggregate over every job and application of a company

        Raises:
            ForbiddenException: caller is not a company
        """
        pass
