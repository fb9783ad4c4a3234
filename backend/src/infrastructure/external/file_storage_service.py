"""
LocalFileStorageService
Handles upload validation and storage on the local filesystem
"""
from pathlib import Path
from typing import List, Optional
from uuid import UUID, uuid4

import aiofiles
import aiofiles.os

from application.services.storage import IFileStorageService, UploadKind
from core.config import settings
from core.exceptions import ResourceNotFoundException, ValidationException
from core.logging_config import logger


class LocalFileStorageService(IFileStorageService):
    """Local filesystem storage service"""

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize file storage service

        Args:
            base_path: Base directory for file storage (default from settings)
        """
        self.base_path = Path(base_path or settings.UPLOAD_DIR)
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def save_file(
        self,
        user_id: UUID,
        filename: str,
        content: bytes,
        kind: UploadKind = UploadKind.DOCUMENT
    ) -> str:
        """
        Save uploaded file to local storage

        Files land in one directory per user under a generated name, so
        uploads with the same original name never overwrite each other.

        Returns:
            Path where the file is saved
        """
        extension = self._validate_file(filename, content, kind)

        user_dir = self.base_path / str(user_id)
        user_dir.mkdir(parents=True, exist_ok=True)
        file_path = user_dir / f"{kind.value}-{uuid4().hex}{extension}"

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        logger.info(f"File saved successfully: {file_path} ({len(content)} bytes)")
        return str(file_path)

    async def resolve_file(self, relative_path: str) -> Path:
        """Absolute path of a stored file, refusing anything outside base_path"""
        base = self.base_path.resolve()
        path = (base / relative_path).resolve()
        if base not in path.parents or not await aiofiles.os.path.isfile(path):
            logger.warning(f"File not found: {relative_path}")
            raise ResourceNotFoundException("File", relative_path)
        return path

    def _validate_file(self, filename: str, content: bytes, kind: UploadKind) -> str:
        """
        Validate uploaded file

        Returns:
            Lower-cased file extension

        Raises:
            ValidationException if validation fails
        """
        if not filename or content is None:
            raise ValidationException.single("file", "No file uploaded.")

        if kind == UploadKind.DOCUMENT:
            allowed_extensions: List[str] = settings.ALLOWED_DOCUMENT_EXTENSIONS
            max_size_mb = settings.MAX_DOCUMENT_SIZE_MB
        else:
            allowed_extensions = settings.ALLOWED_IMAGE_EXTENSIONS
            max_size_mb = settings.MAX_IMAGE_SIZE_MB

        extension = Path(filename).suffix.lower()
        if extension not in allowed_extensions:
            raise ValidationException.single(
                "file", f"Invalid file type. Only {', '.join(allowed_extensions)} allowed."
            )

        if len(content) == 0:
            raise ValidationException.single("file", "Uploaded file is empty.")

        if len(content) > max_size_mb * 1024 * 1024:
            raise ValidationException.single("file", f"File too large. Maximum size is {max_size_mb}MB.")

        return extension
