"""
Job ORM Model
SQLAlchemy model for job postings
"""
import uuid
from sqlalchemy import Column, String, Integer, DateTime, JSON, Boolean, Text, ForeignKey, Uuid

from core.clock import utcnow
from core.database import Base


class JobModel(Base):
    """Job posting table ORM model"""

    __tablename__ = "jobs"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Owning company; applications keep their own copy of this id
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # Basic Info
    title = Column(String(500), nullable=False, index=True)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Classification
    job_type = Column(String(50), nullable=False, default="full-time")
    work_mode = Column(String(50), nullable=False, default="on-site")
    experience_level = Column(String(50), nullable=False, default="entry-level")

    # Salary
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    salary_currency = Column(String(10), nullable=False, default="SZL")
    salary_period = Column(String(20), nullable=False, default="monthly")

    # Structured details
    requirements = Column(JSON, nullable=False, default=dict)  # {"text", "skills"}
    benefits = Column(JSON, nullable=False, default=dict)  # flags + "other"
    contact_email = Column(String(255), nullable=True)
    is_easy_apply = Column(Boolean, nullable=False, default=True)
    is_urgent = Column(Boolean, nullable=False, default=False)

    # Lifecycle
    deadline = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="published", index=True)
    views = Column(Integer, nullable=False, default=0)
    application_count = Column(Integer, nullable=False, default=0)

    # Timestamps
    date = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<JobModel {self.title} at {self.company}>"
