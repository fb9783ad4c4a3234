"""
Domain Enums
Business enumerations for the application
"""
from enum import Enum
from typing import Optional, Type, TypeVar


E = TypeVar("E", bound=Enum)


class UserRole(str, Enum):
    """Account role, fixed at registration"""
    SEEKER = "seeker"
    COMPANY = "company"


class JobType(str, Enum):
    """Job type classifications"""
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class WorkMode(str, Enum):
    """Where the work happens"""
    ON_SITE = "on-site"
    REMOTE = "remote"
    HYBRID = "hybrid"


class ExperienceLevel(str, Enum):
    """Experience level classifications"""
    ENTRY_LEVEL = "entry-level"
    MID_LEVEL = "mid-level"
    SENIOR_LEVEL = "senior-level"
    EXECUTIVE = "executive"


class SalaryPeriod(str, Enum):
    """Pay period of a salary range"""
    HOURLY = "hourly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def parse_enum(enum_cls: Type[E], value: Optional[str], default: E) -> E:
    """
    Parse a client-supplied enum value

    Empty values fall back to ``default``; matching ignores case and
    treats underscores and spaces as hyphens.

    Raises:
        ValueError: if the value is not a member of ``enum_cls``
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
    for member in enum_cls:
        if member.value == normalized:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"must be one of: {allowed}")
