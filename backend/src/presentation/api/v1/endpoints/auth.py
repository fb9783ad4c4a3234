"""
Authentication Endpoints
/api/v1/auth/* routes
"""
from fastapi import APIRouter, Depends, Request, status

from core.config import settings
from application.services.auth.interfaces import IAuthService
from presentation.api.v1.container import get_auth_service
from presentation.api.v1.rate_limit import limiter
from presentation.api.v1.schemas.auth import LoginRequest, RegisterRequest, TokenResponse


router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_AUTH)
async def register(
    request: Request,
    payload: RegisterRequest,
    auth_service: IAuthService = Depends(get_auth_service)
):
    """Create an account and return an access token"""
    user, token = await auth_service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role
    )
    return TokenResponse(token=token, user_id=str(user.id), role=user.role)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_AUTH)
async def login(
    request: Request,
    payload: LoginRequest,
    auth_service: IAuthService = Depends(get_auth_service)
):
    """Exchange email and password for an access token"""
    user, token = await auth_service.login(payload.email, payload.password)
    return TokenResponse(token=token, user_id=str(user.id), role=user.role)
