"""
Authorization & Lifecycle Rules
Policy checks applied at every mutation point

Ownership failures map to ``Unauthorized`` (HTTP 401) and role failures to
``Forbidden`` (HTTP 403). Deadline checks always take the request-time
wall clock as ``now``.
"""
from datetime import datetime
from typing import Iterable, Union
from uuid import UUID

from core.exceptions import (
    AuthorizationException,
    DeadlinePassedException,
    ForbiddenException,
    InvalidStateException,
)
from .entities import Application, Job, User
from .enums import UserRole


def ensure_role(user: User, required: UserRole, message: str = "Authorization denied") -> None:
    """Raise Forbidden unless ``user`` has the ``required`` role"""
    if user.role != required:
        raise ForbiddenException(message)


def ensure_owner(entity: Union[Job, Application], caller_id: UUID) -> None:
    """Raise Unauthorized unless ``caller_id`` owns the job or application"""
    if not entity.is_owned_by(caller_id):
        raise AuthorizationException("User not authorized")


def ensure_owns_all(applications: Iterable[Application], caller_id: UUID) -> None:
    """All-or-nothing ownership check for bulk operations"""
    if any(not app.is_owned_by(caller_id) for app in applications):
        raise AuthorizationException("User not authorized for one or more applications")


def ensure_accepting_applications(job: Job, now: datetime) -> None:
    if job.is_deadline_passed(now):
        raise DeadlinePassedException()


def ensure_reopenable(job: Job, now: datetime) -> None:
    if job.is_deadline_passed(now):
        raise InvalidStateException(
            "Cannot reopen a job whose deadline has passed. Update the deadline first.",
            reason="DeadlineExpired",
        )
