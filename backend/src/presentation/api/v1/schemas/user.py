"""
User Profile Schemas
"""
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from application.services.profile import ProfileCompletion, UserSearchPage
from domain.entities import User, Document, Skill, Experience, Education


class DocumentResponse(BaseModel):
    id: str
    original_name: str
    file_path: str
    date_uploaded: Optional[datetime] = None

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentResponse":
        return cls(
            id=document.id,
            original_name=document.original_name,
            file_path=document.file_path,
            date_uploaded=document.date_uploaded,
        )


class SkillResponse(BaseModel):
    id: str
    name: str

    @classmethod
    def from_entity(cls, skill: Skill) -> "SkillResponse":
        return cls(id=skill.id, name=skill.name)


class ExperienceResponse(BaseModel):
    id: str
    title: str
    company: str
    location: Optional[str] = None
    from_date: datetime
    to_date: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    @classmethod
    def from_entity(cls, entry: Experience) -> "ExperienceResponse":
        return cls(
            id=entry.id,
            title=entry.title,
            company=entry.company,
            location=entry.location,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            description=entry.description,
        )


class EducationResponse(BaseModel):
    id: str
    school: str
    degree: str
    field_of_study: Optional[str] = None
    from_date: datetime
    to_date: Optional[datetime] = None
    current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_entity(cls, entry: Education) -> "EducationResponse":
        return cls(
            id=entry.id,
            school=entry.school,
            degree=entry.degree,
            field_of_study=entry.field_of_study,
            from_date=entry.from_date,
            to_date=entry.to_date,
            current=entry.current,
            grade=entry.grade,
            description=entry.description,
        )

class ProfileResponse(BaseModel):
    """
    Profile view shared by the owner and everyone else

    ``email`` and ``documents`` are only filled in for the owner.
    """

    id: str
    name: str
    role: str
    headline: str
    location: str
    about: Optional[str] = None
    profile_picture: str = ""
    cover_photo: str = ""
    skills: List[SkillResponse] = Field(default_factory=list)
    experience: List[ExperienceResponse] = Field(default_factory=list)
    education: List[EducationResponse] = Field(default_factory=list)
    is_owner: bool = False
    email: Optional[str] = None
    documents: Optional[List[DocumentResponse]] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User, is_owner: bool) -> "ProfileResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            role=user.role.value,
            headline=user.headline,
            location=user.location,
            about=user.about,
            profile_picture=user.profile_picture,
            cover_photo=user.cover_photo,
            skills=[SkillResponse.from_entity(s) for s in user.skills],
            experience=[ExperienceResponse.from_entity(e) for e in user.experience],
            education=[EducationResponse.from_entity(e) for e in user.education],
            is_owner=is_owner,
            email=str(user.email) if is_owner else None,
            documents=[DocumentResponse.from_entity(d) for d in user.documents] if is_owner else None,
            created_at=user.created_at,
        )


class DirectoryEntryResponse(BaseModel):
    """Networking directory card"""

    id: str
    name: str
    headline: str
    profile_picture: str = ""
    location: str

    @classmethod
    def from_entity(cls, user: User) -> "DirectoryEntryResponse":
        return cls(
            id=str(user.id),
            name=user.name,
            headline=user.headline,
            profile_picture=user.profile_picture,
            location=user.location,
        )


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    headline: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    about: Optional[str] = None


class SkillRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class ExperienceRequest(BaseModel):
    """Work history entry; ``from``/``to`` are accepted as aliases"""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("from_date", "from", "fromDate")
    )
    to_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("to_date", "to", "toDate")
    )
    current: bool = False
    description: Optional[str] = None


class ExperienceUpdateRequest(BaseModel):
    """Partial edit; omitted fields keep their current value"""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("from_date", "from", "fromDate", "startDate")
    )
    to_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("to_date", "to", "toDate", "endDate")
    )
    current: Optional[bool] = None
    description: Optional[str] = None


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = Field(
        None, validation_alias=AliasChoices("field_of_study", "fieldOfStudy")
    )
    from_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("from_date", "from", "fromDate", "startDate")
    )
    to_date: Optional[Union[datetime, date]] = Field(
        None, validation_alias=AliasChoices("to_date", "to", "toDate", "endDate")
    )
    current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None


class ProfileCompletionResponse(BaseModel):
    percentage: int
    completed: int
    total: int
    strength: str
    suggestions: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ProfileCompletion) -> "ProfileCompletionResponse":
        return cls(
            percentage=result.percentage,
            completed=result.completed,
            total=result.total,
            strength=result.strength,
            suggestions=result.suggestions,
        )


class UserSearchResponse(BaseModel):
    users: List[DirectoryEntryResponse] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    pages: int = 0

    @classmethod
    def from_page(cls, result: UserSearchPage) -> "UserSearchResponse":
        return cls(
            users=[DirectoryEntryResponse.from_entity(u) for u in result.users],
            total=result.total,
            page=result.page,
            limit=result.limit,
            pages=result.pages,
        )
