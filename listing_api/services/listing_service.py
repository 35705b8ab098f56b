"""
Listing API — Listing Service (Business Logic)
==============================================

What:  Every listing operation behind the HTTP routes: list, show, create,
       update, reference-field update, delete.
How:   Builds SQLAlchemy queries on the request's AsyncSession, checks
       reference ids against their lookup tables, delegates photo uploads
       to PhotoService and maps rows onto the response views.
Who:   Called by routes/listings.py.

Operation Flow (POST /listings):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Form +  │───▶│  Reference  │───▶│ Photo upload │───▶│  INSERT  │
    │  photo   │    │  ids exist? │    │  (optional)  │    │  (flush) │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

Error Handling:
    NotFoundError / ValidationError / BadRequestError are raised here.
    Database and storage failures are not caught; they propagate to the
    global handlers and the session dependency rolls back.

The service holds no state; the session and storage backend are passed in
on every call.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from listing_api.config import settings
from listing_api.database import Base
from listing_api.exceptions import BadRequestError, NotFoundError, ValidationError
from listing_api.models.listing import Listing
from listing_api.models.reference import Category, ListingType, Status
from listing_api.schemas.listing import (
    FieldUpdateResponse,
    ListingDetail,
    ListingFieldUpdate,
    ListingPayload,
    ListingSummary,
    ReferenceOut,
)
from listing_api.services.photo_service import PhotoUpload, photo_service
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

LISTING_NOT_FOUND = "Listing not found"
NO_LISTINGS_FOUND = "No listings found"
FIELD_REQUIRED = "At least one field is required"

# Column → (lookup model, display name). Order matters: it decides which
# field the PATCH /field message names.
REFERENCE_FIELDS: Dict[str, Tuple[Type[Base], str]] = {
    "status_id": (Status, "status"),
    "category_id": (Category, "category"),
    "type_id": (ListingType, "type"),
}

_EAGER = (
    selectinload(Listing.category),
    selectinload(Listing.type),
    selectinload(Listing.status),
    selectinload(Listing.liked_by_users),
)


def _liked_by_ids(listing: Listing) -> List[int]:
    return sorted(user.id for user in listing.liked_by_users)


def to_summary(listing: Listing) -> ListingSummary:
    """Row → GET /listings element."""
    return ListingSummary(
        id=listing.id,
        title=listing.title,
        user_id=listing.user_id,
        photo=listing.photo,
        created_at=listing.created_at,
        category=listing.category.name,
        type=listing.type.name,
        status=listing.status.name,
        liked_by_users=_liked_by_ids(listing),
    )


def to_detail(listing: Listing) -> ListingDetail:
    """Row → GET /listings/{id} body."""
    return ListingDetail(
        id=listing.id,
        title=listing.title,
        description=listing.description,
        user_id=listing.user_id,
        photo=listing.photo,
        created_at=listing.created_at,
        updated_at=listing.updated_at,
        category=ReferenceOut.model_validate(listing.category),
        type=ReferenceOut.model_validate(listing.type),
        status=ReferenceOut.model_validate(listing.status),
        liked_by_users=_liked_by_ids(listing),
    )


class ListingService:
    """
    Business logic layer for listing operations.

    Responsibilities:
        - list_active():             GET    /listings
        - get_listing():             GET    /listings/{id}
        - create_listing():          POST   /listings
        - update_listing():          PUT    /listings/{id}
        - update_reference_fields(): PATCH  /listings/{id}/field
        - delete_listing():          DELETE /listings/{id}
    """

    async def _find(self, db: AsyncSession, listing_id: int) -> Optional[Listing]:
        # Relations are always loaded: async sessions cannot lazy-load, and
        # delete needs liked_by_users to clear listing_likes rows.
        result = await db.execute(
            select(Listing).where(Listing.id == listing_id).options(*_EAGER)
        )
        return result.scalar_one_or_none()

    async def _get_or_404(self, db: AsyncSession, listing_id: int) -> Listing:
        listing = await self._find(db, listing_id)
        if listing is None:
            raise NotFoundError(
                message=LISTING_NOT_FOUND,
                resource="listing",
                resource_id=str(listing_id),
            )
        return listing

    async def _ensure_references_exist(
        self, db: AsyncSession, values: Dict[str, Any]
    ) -> None:
        """
        Check every reference id in `values` against its lookup table.

        Raises:
            ValidationError: First id (status, category, type order) with no
                             matching row.
        """
        for field, (model, _) in REFERENCE_FIELDS.items():
            if field not in values:
                continue
            if await db.get(model, values[field]) is None:
                raise ValidationError(
                    message=f"The selected {field} is invalid.",
                    field=field,
                    context={"value": values[field]},
                )

    async def list_active(self, db: AsyncSession) -> List[ListingSummary]:
        """
        All listings whose status is the active status, shaped as summaries.

        Query plan:
            SELECT ... FROM listings WHERE status_id = :active ORDER BY id
            + one SELECT ... IN (...) per eager-loaded relation

        Raises:
            NotFoundError: No active listing exists.
        """
        result = await db.execute(
            select(Listing)
            .where(Listing.status_id == settings.active_status_id)
            .options(*_EAGER)
            .order_by(Listing.id)
        )
        listings = result.scalars().all()

        if not listings:
            raise NotFoundError(message=NO_LISTINGS_FOUND, resource="listing")

        return [to_summary(listing) for listing in listings]

    async def get_listing(self, db: AsyncSession, listing_id: int) -> ListingDetail:
        """
        Raises:
            NotFoundError: No listing with this id.
        """
        listing = await self._get_or_404(db, listing_id)
        return to_detail(listing)

    async def create_listing(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        payload: ListingPayload,
        user_id: int,
        photo: Optional[PhotoUpload] = None,
    ) -> Listing:
        """
        Persist a new listing owned by `user_id`.

        The photo, when given, is uploaded before the INSERT; its public URL
        becomes `listing.photo`.

        Raises:
            ValidationError: Dangling reference id or unacceptable photo.
            StorageError:    Photo upload failed.
        """
        data = payload.model_dump()
        await self._ensure_references_exist(db, data)

        if photo is not None:
            data["photo"] = await photo_service.upload_photo(storage, photo)

        listing = Listing(**data, user_id=user_id)
        db.add(listing)
        await db.flush()

        logger.info("Listing %s created by user %s", listing.id, user_id)
        return listing

    async def update_listing(
        self,
        db: AsyncSession,
        storage: ObjectStorage,
        listing_id: int,
        payload: ListingPayload,
        photo: Optional[PhotoUpload] = None,
    ) -> Listing:
        """
        Replace every payload field of an existing listing.

        Raises:
            NotFoundError:   No listing with this id (checked before anything
                             is uploaded or written).
            ValidationError: Dangling reference id or unacceptable photo.
            StorageError:    Photo upload failed.
        """
        listing = await self._get_or_404(db, listing_id)

        data = payload.model_dump()
        await self._ensure_references_exist(db, data)

        if photo is not None:
            data["photo"] = await photo_service.upload_photo(storage, photo)

        for field, value in data.items():
            setattr(listing, field, value)
        await db.flush()

        logger.info("Listing %s updated", listing_id)
        return listing

    async def update_reference_fields(
        self,
        db: AsyncSession,
        listing_id: int,
        fields: ListingFieldUpdate,
    ) -> FieldUpdateResponse:
        """
        Apply any of status_id / category_id / type_id to a listing.

        Every supplied (non-null) id must exist, zero included. The message
        names the first applied field in status, category, type order;
        `fields` names every one.

        Raises:
            BadRequestError: No supplied value is non-zero. Checked first, so
                             the listing id is irrelevant in that case.
            NotFoundError:   No listing with this id.
            ValidationError: A supplied id has no row in its lookup table.
        """
        supplied = {
            field: value
            for field, value in fields.model_dump(exclude_unset=True).items()
            if field in REFERENCE_FIELDS and value is not None
        }
        to_apply = {field: supplied[field] for field in REFERENCE_FIELDS if supplied.get(field)}

        if not to_apply:
            raise BadRequestError(message=FIELD_REQUIRED)

        listing = await self._get_or_404(db, listing_id)
        await self._ensure_references_exist(db, supplied)

        for field, value in to_apply.items():
            setattr(listing, field, value)
        await db.flush()

        names = [REFERENCE_FIELDS[field][1] for field in to_apply]
        logger.info("Listing %s reference fields updated: %s", listing_id, ", ".join(names))
        return FieldUpdateResponse(message=f"Listing {names[0]} updated", fields=names)

    async def delete_listing(self, db: AsyncSession, listing_id: int) -> None:
        """
        Raises:
            NotFoundError: No listing with this id (also on a second delete).
        """
        listing = await self._get_or_404(db, listing_id)
        await db.delete(listing)
        await db.flush()
        logger.info("Listing %s deleted", listing_id)


listing_service = ListingService()
