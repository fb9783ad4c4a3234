"""
Authentication Request/Response Schemas
Pydantic v2 models with strict validation
"""
from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.enums import UserRole


class RegisterRequest(BaseModel):
    """Account registration"""

    name: str = Field(..., min_length=1, max_length=255, examples=["Lindiwe Dlamini"])
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = Field(UserRole.SEEKER, description="seeker or company; fixed after registration")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        if v is None or v == "":
            return UserRole.SEEKER
        return str(v).strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    """Email/password login"""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Issued access token"""

    token: str
    token_type: str = "bearer"
    user_id: str
    role: UserRole
