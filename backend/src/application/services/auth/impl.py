"""
Authentication Service Implementation
Concrete implementation of IAuthService
"""
from typing import Dict, Tuple
from uuid import uuid4

from loguru import logger

from domain.entities import User
from domain.enums import UserRole
from domain.value_objects import Email
from core.clock import utcnow
from core.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from application.repositories.interfaces import IUserRepository
from .interfaces import IAuthService, IJwtService, IPasswordHasher

MIN_PASSWORD_LENGTH = 6


class AuthService(IAuthService):
    """Authentication service implementation"""

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        jwt_service: IJwtService
    ):
        self.user_repo = user_repository
        self.password_hasher = password_hasher
        self.jwt_service = jwt_service

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.SEEKER
    ) -> Tuple[User, str]:
        """Register a new user"""

        logger.info(f"Registering new user: {email}")

        errors: Dict[str, str] = {}
        if not name or not name.strip():
            errors["name"] = "Name is required"
        try:
            email_vo = Email(email)
        except ValueError as e:
            errors["email"] = str(e)
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if errors:
            raise ValidationException(errors)

        # Check if user already exists
        if await self.user_repo.exists_by_email(str(email_vo)):
            raise DuplicateResourceException("Email", "email", str(email_vo))

        now = utcnow()
        user = User(
            id=uuid4(),
            name=name.strip(),
            email=email_vo,
            password_hash=self.password_hasher.hash_password(password),
            role=role,
            created_at=now,
            updated_at=now
        )

        created_user = await self.user_repo.create(user)
        logger.info(f"User registered successfully: {email_vo} ({role.value})")

        return created_user, self.jwt_service.create_access_token(created_user.id)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """Authenticate user"""

        logger.info(f"Login attempt: {email}")

        user = await self.user_repo.get_by_email(email or "")
        if not user:
            logger.warning(f"Login failed: User not found - {email}")
            raise AuthenticationException("Invalid credentials")

        if not self.password_hasher.verify_password(password or "", user.password_hash):
            logger.warning(f"Login failed: Invalid password - {email}")
            raise AuthenticationException("Invalid credentials")

        logger.info(f"User logged in successfully: {email}")

        return user, self.jwt_service.create_access_token(user.id)
