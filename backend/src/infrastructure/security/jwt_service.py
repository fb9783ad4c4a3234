"""
JWT Service Implementation
HS256 with the configured secret, RS256 when a key pair is configured
"""
from datetime import timedelta
from typing import Dict
from uuid import UUID

from jose import jwt, JWTError
from loguru import logger

from core.clock import utcnow
from core.config import settings
from core.exceptions import AuthenticationException
from application.services.auth.interfaces import IJwtService


class JwtService(IJwtService):
    """Stateless access tokens; every request re-verifies"""

    def __init__(self):
        if settings.JWT_PRIVATE_KEY and settings.JWT_PUBLIC_KEY:
            self.algorithm = "RS256"
            self._signing_key = settings.JWT_PRIVATE_KEY
            self._verifying_key = settings.JWT_PUBLIC_KEY
        else:
            self.algorithm = settings.JWT_ALGORITHM
            self._signing_key = settings.JWT_SECRET_KEY
            self._verifying_key = settings.JWT_SECRET_KEY

    def create_access_token(self, user_id: UUID) -> str:
        """Create access token"""
        now = utcnow()
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
            "iat": now,
            "type": "access"
        }
        return jwt.encode(payload, self._signing_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict:
        """Verify and decode token"""
        try:
            payload = jwt.decode(token, self._verifying_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            raise AuthenticationException()

        if payload.get("type") != "access" or not payload.get("sub"):
            logger.warning("JWT rejected: not an access token")
            raise AuthenticationException()
        return payload

    def get_user_id(self, token: str) -> UUID:
        payload = self.verify_token(token)
        try:
            return UUID(payload["sub"])
        except (ValueError, TypeError):
            raise AuthenticationException()
