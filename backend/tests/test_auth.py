"""
Tests for registration, login, tokens and password hashing
"""
from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from core.clock import utcnow
from core.config import settings
from core.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    ValidationException,
)
from domain.enums import UserRole
from infrastructure.security.jwt_service import JwtService
from infrastructure.security.password_hasher import BcryptPasswordHasher
from presentation.api.v1.dependencies import extract_token


class TestAuthService:

    @pytest.mark.asyncio
    async def test_register_and_login(self, auth_service):
        user, token = await auth_service.register("Thandi", "Thandi@Example.com", "secret123", UserRole.COMPANY)

        assert str(user.email) == "thandi@example.com"
        assert user.role == UserRole.COMPANY
        assert user.password_hash != "secret123"
        assert JwtService().get_user_id(token) == user.id

        logged_in, _ = await auth_service.login("THANDI@example.com", "secret123")
        assert logged_in.id == user.id

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth_service):
        await auth_service.register("Thandi", "thandi@example.com", "secret123")
        with pytest.raises(DuplicateResourceException) as exc:
            await auth_service.register("Other", "THANDI@example.com", "secret123")
        assert exc.value.reason == "DuplicateEmail"

    @pytest.mark.asyncio
    async def test_invalid_registration_reports_every_field(self, auth_service):
        with pytest.raises(ValidationException) as exc:
            await auth_service.register(" ", "not-an-email", "123")
        assert set(exc.value.errors) == {"name", "email", "password"}

    @pytest.mark.asyncio
    async def test_bad_credentials(self, auth_service):
        await auth_service.register("Thandi", "thandi@example.com", "secret123")

        with pytest.raises(AuthenticationException) as wrong_password:
            await auth_service.login("thandi@example.com", "wrong-password")
        with pytest.raises(AuthenticationException) as unknown_user:
            await auth_service.login("nobody@example.com", "secret123")

        assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


class TestJwtService:

    def test_round_trip(self):
        user_id = uuid4()
        service = JwtService()
        assert service.get_user_id(service.create_access_token(user_id)) == user_id

    def test_expired_token(self):
        past = utcnow() - timedelta(hours=1)
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": past, "iat": past - timedelta(hours=1), "type": "access"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationException):
            JwtService().verify_token(token)

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "access"},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationException):
            JwtService().verify_token(token)

    def test_wrong_token_type(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "type": "refresh"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationException):
            JwtService().verify_token(token)

    def test_garbage(self):
        with pytest.raises(AuthenticationException):
            JwtService().get_user_id("not.a.token")


class TestExtractToken:

    def test_x_auth_token_wins(self):
        assert extract_token(" abc ", "Bearer xyz") == "abc"

    def test_bearer_header(self):
        assert extract_token(None, "Bearer xyz") == "xyz"
        assert extract_token(None, "bearer xyz") == "xyz"

    def test_missing_or_malformed(self):
        assert extract_token(None, None) is None
        assert extract_token("", "Token xyz") is None
        assert extract_token(None, "Bearer") is None


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash_password("secret123")

        assert hashed.startswith("$2")
        assert hasher.verify_password("secret123", hashed)
        assert not hasher.verify_password("secret124", hashed)

    def test_malformed_hash(self):
        assert not BcryptPasswordHasher(rounds=4).verify_password("secret123", "not-a-hash")
