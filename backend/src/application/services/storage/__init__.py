"""
File Storage Service Interface
Blob store for uploaded documents and profile images
"""
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from uuid import UUID


class UploadKind(str, Enum):
    """What an upload is used for; decides the allowed extensions"""
    DOCUMENT = "document"
    PROFILE_PICTURE = "profile_picture"
    COVER_PHOTO = "cover_photo"


class IFileStorageService(ABC):
    """File storage service interface"""

    @abstractmethod
    async def save_file(self, user_id: UUID, filename: str, content: bytes, kind: UploadKind) -> str:
        """
        Validate and store an upload

        Returns:
            Path of the stored file

        Raises:
            ValidationException: missing file, bad extension or too large
        """
        pass

    @abstractmethod
    async def resolve_file(self, relative_path: str) -> Path:
        """
        Locate a stored file by its path under the storage root

        Raises:
            ResourceNotFoundException: missing file or a path outside the root
        """
        pass
