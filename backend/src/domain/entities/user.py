"""
User Domain Entity
Immutable user aggregate with embedded documents, skills, experience and education
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from ..enums import UserRole
from ..value_objects import Email


DEFAULT_HEADLINE = "Job Seeker"

def new_sub_id() -> str:
    """Generated id for a value embedded in the user aggregate"""
    return uuid4().hex


def _parse_dt(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _format_dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Document:
    """Reference to an uploaded file"""

    original_name: str
    file_path: str
    id: str = field(default_factory=new_sub_id)
    date_uploaded: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original_name": self.original_name,
            "file_path": self.file_path,
            "date_uploaded": _format_dt(self.date_uploaded),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(
            id=data["id"],
            original_name=data["original_name"],
            file_path=data["file_path"],
            date_uploaded=_parse_dt(data.get("date_uploaded")),
        )


@dataclass(frozen=True)
class Skill:
    name: str
    id: str = field(default_factory=new_sub_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Skill":
        return cls(id=data["id"], name=data["name"])


@dataclass(frozen=True)
class Experience:
    """Work history entry"""

    title: str
    company: str
    from_date: datetime
    id: str = field(default_factory=new_sub_id)
    location: Optional[str] = None
    to_date: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "from_date": _format_dt(self.from_date),
            "to_date": _format_dt(self.to_date),
            "current": self.current,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        return cls(
            id=data["id"],
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=_parse_dt(data["from_date"]),
            to_date=_parse_dt(data.get("to_date")),
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Education:
    """School or university entry"""

    school: str
    degree: str
    from_date: datetime
    id: str = field(default_factory=new_sub_id)
    field_of_study: Optional[str] = None
    to_date: Optional[datetime] = None
    current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "school": self.school,
            "degree": self.degree,
            "field_of_study": self.field_of_study,
            "from_date": _format_dt(self.from_date),
            "to_date": _format_dt(self.to_date),
            "current": self.current,
            "grade": self.grade,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            id=data["id"],
            school=data["school"],
            degree=data["degree"],
            field_of_study=data.get("field_of_study"),
            from_date=_parse_dt(data["from_date"]),
            to_date=_parse_dt(data.get("to_date")),
            current=bool(data.get("current", False)),
            grade=data.get("grade"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: UUID
    name: str
    email: Email
    password_hash: str
    role: UserRole = UserRole.SEEKER

    # Profile
    headline: str = DEFAULT_HEADLINE
    location: str = "Eswatini"
    about: Optional[str] = None
    profile_picture: str = ""
    cover_photo: str = ""

    # Embedded values, newest first
    documents: List[Document] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate user data"""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Name cannot be empty")

    def find_document(self, document_id: str) -> Optional[Document]:
        return next((d for d in self.documents if d.id == document_id), None)

    def has_skill(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(s.name.lower() == wanted for s in self.skills)

    def __str__(self) -> str:
        return f"User({self.email}, {self.role.value})"
