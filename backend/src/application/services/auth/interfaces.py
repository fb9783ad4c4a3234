"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod
from typing import Tuple
from uuid import UUID

from domain.entities import User
from domain.enums import UserRole


class IPasswordHasher(ABC):
    """Password hashing interface"""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plain password"""
        pass

    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        pass


class IJwtService(ABC):
    """JWT token service interface"""

    @abstractmethod
    def create_access_token(self, user_id: UUID) -> str:
        """Create access token"""
        pass

    @abstractmethod
    def verify_token(self, token: str) -> dict:
        """
        Verify and decode token

        Raises:
            AuthenticationException: token missing, malformed, expired or wrongly signed
        """
        pass

    @abstractmethod
    def get_user_id(self, token: str) -> UUID:
        """Resolve a token to the user id it carries"""
        pass


class IAuthService(ABC):
    """Authentication service interface"""

    @abstractmethod
    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.SEEKER
    ) -> Tuple[User, str]:
        """
        Register a new user

        Returns:
            Tuple of (User, access token)
        """
        pass

    @abstractmethod
    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user

        Returns:
            Tuple of (User, access token)
        """
        pass
