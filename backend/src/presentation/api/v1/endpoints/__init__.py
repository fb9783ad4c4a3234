"""
API V1 Endpoints Package
Exports routers used by main app
"""
from .auth import router as auth_router
from .users import router as users_router
from .jobs import router as jobs_router
from .applications import router as applications_router
from .messages import router as messages_router
from .files import router as files_router

__all__ = [
    "auth_router",
    "users_router",
    "jobs_router",
    "applications_router",
    "messages_router",
    "files_router"
]
