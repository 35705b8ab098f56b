"""
Listing API — Listing Route Handlers
====================================

What:  The /listings resource: list, show, store, update, updateField,
       destroy.
How:   Decode the request (path id, multipart form + photo, JSON body),
       call ListingService, choose the status code. Errors are raised as
       exceptions and formatted by the global handlers in main.py.

Request formats:
    POST /listings, PUT|PATCH /listings/{id}
        multipart/form-data: title, description, category_id, type_id,
        status_id, optional `photo` file
    PATCH /listings/{id}/field
        application/json: any of status_id, category_id, type_id
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from listing_api.auth import get_current_user_id
from listing_api.database import get_db_session
from listing_api.schemas.listing import (
    ErrorResponse,
    FieldUpdateResponse,
    ListingDetail,
    ListingFieldUpdate,
    ListingPayload,
    ListingSummary,
    MessageResponse,
)
from listing_api.services.listing_service import listing_service
from listing_api.services.photo_service import PhotoUpload
from listing_api.services.storage import get_object_storage
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["Listings"])

_NOT_FOUND = {404: {"description": "Listing not found", "model": ErrorResponse}}
_INVALID = {422: {"description": "Validation failed", "model": ErrorResponse}}


def listing_form(
    title: str = Form(..., min_length=1, max_length=255),
    description: str = Form(..., min_length=1),
    category_id: int = Form(..., ge=1),
    type_id: int = Form(..., ge=1),
    status_id: int = Form(..., ge=1),
) -> ListingPayload:
    """Multipart form fields → ListingPayload. FastAPI enforces the constraints (422)."""
    return ListingPayload(
        title=title,
        description=description,
        category_id=category_id,
        type_id=type_id,
        status_id=status_id,
    )


async def _read_photo(photo: Optional[UploadFile]) -> Optional[PhotoUpload]:
    # Browsers submit an empty part with no filename when no file is chosen
    if photo is None or not photo.filename:
        return None
    try:
        content = await photo.read()
    finally:
        await photo.close()

    logger.info("Received photo upload: filename=%s, size=%d bytes", photo.filename, len(content))
    return PhotoUpload(
        filename=photo.filename,
        content=content,
        content_type=photo.content_type,
    )


@router.get(
    "",
    response_model=List[ListingSummary],
    responses={404: {"description": "No active listings", "model": ErrorResponse}},
    summary="List active listings",
)
async def list_listings(
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> List[ListingSummary]:
    """
    Every listing with the active status. Category, type and status are given
    by name; description and updated_at are omitted. 404 when there are none.
    """
    return await listing_service.list_active(db)


@router.post(
    "",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Listing created", "model": MessageResponse},
        401: {"description": "No caller identity", "model": ErrorResponse},
        **_INVALID,
    },
    summary="Create a listing",
)
async def store_listing(
    payload: ListingPayload = Depends(listing_form),
    photo: Optional[UploadFile] = File(default=None, description="Listing photo (optional)"),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
    storage: ObjectStorage = Depends(get_object_storage),
) -> MessageResponse:
    """
    Creates a listing owned by the caller. The created entity is not
    returned; fetch it through GET /listings or GET /listings/{id}.
    """
    upload = await _read_photo(photo)
    await listing_service.create_listing(db, storage, payload, user_id=user_id, photo=upload)
    return MessageResponse(message="Listing created")


@router.get(
    "/{listing_id}",
    response_model=ListingDetail,
    responses=_NOT_FOUND,
    summary="Get a single listing",
)
async def show_listing(
    listing_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> ListingDetail:
    return await listing_service.get_listing(db, listing_id)


@router.api_route(
    "/{listing_id}",
    methods=["PUT", "PATCH"],
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_INVALID},
    summary="Replace a listing's fields",
)
async def update_listing(
    listing_id: int,
    payload: ListingPayload = Depends(listing_form),
    photo: Optional[UploadFile] = File(default=None, description="Replacement photo (optional)"),
    db: AsyncSession = Depends(get_db_session, scope="function"),
    storage: ObjectStorage = Depends(get_object_storage),
) -> MessageResponse:
    upload = await _read_photo(photo)
    await listing_service.update_listing(db, storage, listing_id, payload, photo=upload)
    return MessageResponse(message="Listing updated")


@router.patch(
    "/{listing_id}/field",
    response_model=FieldUpdateResponse,
    responses={
        400: {"description": "No field supplied", "model": ErrorResponse},
        **_NOT_FOUND,
        **_INVALID,
    },
    summary="Change a listing's status, category or type",
)
async def update_listing_field(
    listing_id: int,
    fields: Optional[ListingFieldUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> FieldUpdateResponse:
    """
    Accepts any combination of status_id, category_id and type_id. All
    supplied fields are written; the message names the first one in
    status, category, type order, e.g. "Listing status updated".
    """
    return await listing_service.update_reference_fields(
        db, listing_id, fields or ListingFieldUpdate()
    )


@router.delete(
    "/{listing_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a listing",
)
async def destroy_listing(
    listing_id: int,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await listing_service.delete_listing(db, listing_id)
    return MessageResponse(message="Listing deleted")
