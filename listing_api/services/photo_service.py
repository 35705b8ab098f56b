"""
Listing API — Listing Photo Upload
==================================

What:  Validates an uploaded listing photo and publishes it to object
       storage, returning the public URL saved in `listings.photo`.
Who:   Called by ListingService.create_listing / update_listing.

Upload pipeline:
    1. Extension check   (.png .jpg .jpeg .gif .webp)
    2. Size check        (non-empty, <= settings.max_file_size)
    3. store()           under settings.listing_photo_dir
    4. set_public()
    5. public_url()

The upload and the record write that follows are not one transaction: if
the write fails, the uploaded object stays in the bucket.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from listing_api.config import settings
from listing_api.exceptions import ValidationError
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


@dataclass(frozen=True)
class PhotoUpload:
    """An uploaded file already read into memory by the route."""
    filename: str
    content: bytes
    content_type: Optional[str] = None


class PhotoService:
    """Stateless; the storage backend is passed in on every call."""

    def validate_extension(self, filename: str) -> str:
        """
        Returns the normalized (lowercase) extension.

        Raises:
            ValidationError: Extension missing or not an allowed image type.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"The photo must be a file of type: "
                    f"{', '.join(sorted(e.lstrip('.') for e in ALLOWED_EXTENSIONS))}."
                ),
                field="photo",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, size: int) -> None:
        """
        Raises:
            ValidationError: Empty file, or larger than settings.max_file_size.
        """
        if size == 0:
            raise ValidationError(message="The photo is empty.", field="photo")

        if size > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"The photo may not be greater than {max_mb:.0f}MB.",
                field="photo",
                context={"max_size_mb": max_mb, "actual_size": size},
            )

    async def upload_photo(self, storage: ObjectStorage, photo: PhotoUpload) -> str:
        """
        Validate, store, publish. Returns the photo's public URL.

        Raises:
            ValidationError: Bad extension or size.
            StorageError:    The storage backend failed.
        """
        self.validate_extension(photo.filename)
        self.validate_size(len(photo.content))

        path = await storage.store(
            photo.content,
            settings.listing_photo_dir,
            photo.filename,
            content_type=photo.content_type,
        )
        await storage.set_public(path)
        url = storage.public_url(path)

        logger.info("Listing photo uploaded: %s", url)
        return url


photo_service = PhotoService()
