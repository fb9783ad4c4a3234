"""
User ORM Model
SQLAlchemy model for persistence
"""
import uuid
from sqlalchemy import Column, String, DateTime, JSON, Text, Uuid

from core.clock import utcnow
from core.database import Base


class UserModel(Base):
    """User table ORM model"""

    __tablename__ = "users"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)

    # Authentication
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="seeker", index=True)  # seeker | company

    # Profile
    headline = Column(String(255), nullable=False, default="Job Seeker")
    location = Column(String(255), nullable=False, default="Eswatini")
    about = Column(Text, nullable=True)
    profile_picture = Column(String(1000), nullable=False, default="")
    cover_photo = Column(String(1000), nullable=False, default="")

    # Embedded values (lists of dicts, each with a generated "id")
    documents = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<UserModel {self.email}>"
