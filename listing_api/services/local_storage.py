"""
Listing API — Local Disk Object Storage
=======================================

What:  ObjectStorage backend that writes photos under settings.storage_root.
Who:   Used when STORAGE_BACKEND=local (development, demos, tests).
How:   Async writes with aiofiles, UUID filenames, files served back by the
       /media route.

Directory Structure:
    storage/
    └── listings/
        ├── 0b4f5c1e9d2a4e7f8a6b3c2d1e0f9a8b.jpg
        └── 7e6d5c4b3a29180f7e6d5c4b3a291800.png
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

import aiofiles

from listing_api.config import settings
from listing_api.exceptions import StorageError
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

# rw-r--r--: readable by the web server and anyone else on the host
PUBLIC_FILE_MODE = 0o644


class LocalStorage(ObjectStorage):
    """Stores objects as plain files below a root directory."""

    def __init__(self, storage_root: Optional[str] = None, base_url: Optional[str] = None):
        """
        Args:
            storage_root: Override settings.storage_root (used in tests).
            base_url:     Override settings.public_base_url.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.base_url = (base_url or settings.public_base_url).rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalStorage initialized with storage_root=%s", self.storage_root)

    def resolve(self, path: str) -> Path:
        """
        Absolute path for a stored object.

        Raises:
            StorageError: `path` escapes the storage root (e.g. "../../etc").
        """
        full_path = (self.storage_root / path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            raise StorageError(message="Invalid storage path", context={"path": path})
        return full_path

    async def store(
        self,
        content: bytes,
        directory: str,
        filename: str,
        content_type: Optional[str] = None,
    ) -> str:
        extension = Path(filename).suffix.lower()
        relative_path = f"{directory.strip('/')}/{uuid.uuid4().hex}{extension}"
        absolute_path = self.storage_root / relative_path

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise StorageError(context={"path": str(absolute_path), "os_error": str(e)})

        logger.info("File stored: %s (%d bytes)", relative_path, len(content))
        return relative_path

    async def set_public(self, path: str) -> None:
        try:
            os.chmod(self.resolve(path), PUBLIC_FILE_MODE)
        except OSError as e:
            logger.error("Failed to make %s public: %s", path, str(e))
            raise StorageError(context={"path": path, "os_error": str(e)})

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/media/{path.lstrip('/')}"

    async def health_check(self) -> bool:
        return self.storage_root.is_dir() and os.access(self.storage_root, os.W_OK)
