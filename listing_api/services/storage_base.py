"""
Listing API — Abstract Object Storage Interface
===============================================

What:  Contract for the object store that holds listing photos.
How:   Concrete backends (S3Storage, LocalStorage) implement the four
       methods; PhotoService and the health route only see this class.
Who:   Selected by get_object_storage() from settings.storage_backend.

Contract:
    path = await storage.store(content, "listings", "chair.jpg")
    await storage.set_public(path)
    url = storage.public_url(path)

    - store() picks a unique path inside `directory` and writes the bytes
    - set_public() makes the stored object world-readable
    - public_url() is pure: it formats a URL and performs no I/O
    - Provider errors are wrapped in StorageError
"""

from abc import ABC, abstractmethod
from typing import Optional


class ObjectStorage(ABC):
    """
    Abstract interface for photo storage backends.

    Implementations:
        - S3Storage:    AWS S3 (or any S3-compatible endpoint), production
        - LocalStorage: files under settings.storage_root, development/tests
    """

    @abstractmethod
    async def store(
        self,
        content: bytes,
        directory: str,
        filename: str,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Write `content` under `directory` and return its storage path.

        Args:
            content:      Raw file bytes
            directory:    Logical directory, e.g. "listings"
            filename:     Client filename; only its extension is kept
            content_type: MIME type recorded with the object, when supported

        Returns:
            Path relative to the store root, e.g. "listings/<uuid>.jpg".

        Raises:
            StorageError: The write failed.
        """
        ...

    @abstractmethod
    async def set_public(self, path: str) -> None:
        """Make the object at `path` publicly readable. Raises StorageError."""
        ...

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL of the object at `path`."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the backend is reachable and writable. Never raises."""
        ...
