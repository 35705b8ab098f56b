"""
Listing API — Local Media Files
===============================

What:  GET /media/{path} serves photos stored by LocalStorage, so the URLs
       it hands out resolve during development. With the S3 backend the
       photo URLs point at the bucket and this route always answers 404.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from listing_api.exceptions import NotFoundError, StorageError
from listing_api.services.local_storage import LocalStorage
from listing_api.services.storage import get_object_storage
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Media"])


@router.get(
    "/media/{file_path:path}",
    summary="Serve a locally stored listing photo",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found"},
    },
)
async def serve_media(
    file_path: str,
    storage: ObjectStorage = Depends(get_object_storage),
) -> FileResponse:
    if not isinstance(storage, LocalStorage):
        raise NotFoundError(message="File not found", resource="file", resource_id=file_path)

    try:
        full_path = storage.resolve(file_path)
    except StorageError:
        # Outside the storage root
        full_path = None
    if full_path is None or not full_path.is_file():
        raise NotFoundError(message="File not found", resource="file", resource_id=file_path)

    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
