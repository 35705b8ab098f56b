"""
Listing API — Object Storage Selection
======================================

What:  FastAPI dependency returning the configured ObjectStorage backend.
How:   One instance per process, built on first use. Tests replace it with
       app.dependency_overrides[get_object_storage].
"""

from functools import lru_cache

from listing_api.config import settings
from listing_api.services.local_storage import LocalStorage
from listing_api.services.s3_storage import S3Storage
from listing_api.services.storage_base import ObjectStorage


@lru_cache(maxsize=1)
def get_object_storage() -> ObjectStorage:
    if settings.storage_backend == "s3":
        return S3Storage()
    return LocalStorage()
