"""
Custom Exception Hierarchy
Domain and application-level exceptions

Every exception carries a ``kind`` that the API renders in the single
error envelope ``{"error": {"kind", "message"}}``.
"""
from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    """Error kinds exposed to API clients"""
    UNAUTHENTICATED = "Unauthenticated"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    INVALID_STATE = "InvalidState"
    INTERNAL = "Internal"


class DomainException(Exception):
    """Base exception for all domain errors"""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)


class AuthenticationException(DomainException):
    """Missing or invalid credential"""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class AuthorizationException(DomainException):
    """Caller is not the owner of the entity"""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "User not authorized"):
        super().__init__(message)


class ForbiddenException(DomainException):
    """Caller has the wrong role for this operation"""

    kind = ErrorKind.FORBIDDEN


class ValidationException(DomainException):
    """Data validation failed"""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or "; ".join(f"{f}: {m}" for f, m in errors.items()))

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationException":
        return cls({field: message})


class InvalidStateException(DomainException):
    """Operation conflicts with the current state of an entity"""

    kind = ErrorKind.INVALID_STATE
    reason: str = "InvalidState"

    def __init__(self, message: str, reason: Optional[str] = None):
        if reason:
            self.reason = reason
        super().__init__(message)


class DeadlinePassedException(InvalidStateException):
    """Application deadline of a job has passed"""

    reason = "DeadlinePassed"

    def __init__(self, message: str = "The application deadline for this job has passed."):
        super().__init__(message)


class DuplicateApplicationException(InvalidStateException):
    """Applicant already applied to this job"""

    reason = "DuplicateApplication"

    def __init__(self, message: str = "You have already applied for this job"):
        super().__init__(message)


class DuplicateResourceException(InvalidStateException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value: str):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(
            f"{resource_type} with {field}='{value}' already exists",
            reason=f"Duplicate{resource_type.replace(' ', '')}",
        )


class RepositoryException(DomainException):
    """Database operation failed"""

    kind = ErrorKind.INTERNAL


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")
