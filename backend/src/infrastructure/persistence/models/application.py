"""
Application ORM Model
SQLAlchemy model for job applications
"""
import uuid
from sqlalchemy import Column, String, DateTime, Text, JSON, Uuid, UniqueConstraint

from core.clock import utcnow
from core.database import Base


class ApplicationModel(Base):
    """Job application table ORM model"""

    __tablename__ = "applications"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # References (no FK on job_id: applications outlive a deleted job)
    job_id = Column(Uuid, nullable=False, index=True)
    applicant_id = Column(Uuid, nullable=False, index=True)
    company_id = Column(Uuid, nullable=False, index=True)

    # Application Details
    status = Column(String(20), nullable=False, default="pending", index=True)
    cover_letter = Column(Text, nullable=True)
    attached_documents = Column(JSON, nullable=False, default=list)
    company_notes = Column(Text, nullable=False, default="")

    # Timestamps
    date = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # One application per (job, applicant)
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_id_applicant_id"),
    )

    def __repr__(self):
        return f"<ApplicationModel {self.id} - {self.status}>"
