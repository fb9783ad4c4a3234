"""
FastAPI Dependencies
Bearer token resolution, path id and date query parsing
"""
from datetime import date, datetime
from typing import Optional, Union
from uuid import UUID

from fastapi import Depends, Header

from application.services.auth.interfaces import IJwtService
from core.exceptions import AuthenticationException, ResourceNotFoundException, ValidationException
from .container import get_jwt_service


def extract_token(x_auth_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
    """Token from the x-auth-token header or an Authorization: Bearer header"""
    if x_auth_token and x_auth_token.strip():
        return x_auth_token.strip()
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


async def get_current_user_id(
    x_auth_token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
    jwt_service: IJwtService = Depends(get_jwt_service)
) -> UUID:
    """
    Resolve the caller's user id from the bearer token

    Missing, malformed, expired and wrongly signed tokens all produce the
    same "Not authorized" error.

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: UUID = Depends(get_current_user_id)):
            ...
    """
    token = extract_token(x_auth_token, authorization)
    if not token:
        raise AuthenticationException()
    return jwt_service.get_user_id(token)


async def get_optional_user_id(
    x_auth_token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
    jwt_service: IJwtService = Depends(get_jwt_service)
) -> Optional[UUID]:
    """Caller id when a valid token is present, otherwise None"""
    token = extract_token(x_auth_token, authorization)
    if not token:
        return None
    try:
        return jwt_service.get_user_id(token)
    except AuthenticationException:
        return None


def parse_id(value: str, resource_type: str) -> UUID:
    """Path id as UUID; an id that cannot exist is reported as not found"""
    try:
        return UUID(value)
    except (ValueError, TypeError):
        raise ResourceNotFoundException(resource_type, value)


def parse_date_param(value: Optional[str], field: str) -> Optional[Union[date, datetime]]:
    """Query value as a bare ISO date or a full ISO datetime"""
    if value is None or not value.strip():
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationException.single(field, "must be an ISO date or datetime")
