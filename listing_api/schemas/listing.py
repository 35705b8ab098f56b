"""
Listing API — Pydantic Request/Response Schemas
===============================================

What:  The API contract: one explicit view per response shape plus the
       validated input payloads.
How:   The service maps ORM rows onto these views field by field; FastAPI
       serializes them and builds the OpenAPI docs from them.

Response shapes:
    ListingSummary  GET /listings       names instead of reference ids,
                                        no description / updated_at
    ListingDetail   GET /listings/{id}  every column, references nested
                                        as {id, name}
    Both replace the liked-by relation with the bare user ids.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ReferenceOut(BaseModel):
    """A category, type or status as embedded in ListingDetail."""
    id: int
    name: str

    model_config = {"from_attributes": True}


class ListingSummary(BaseModel):
    """
    What:  One element of GET /listings.
    Why these fields: category_id / type_id / status_id are replaced by the
           display names; description and updated_at are left out.
    """
    id: int = Field(description="Listing identifier")
    title: str = Field(description="Listing title")
    user_id: int = Field(description="Id of the user who created the listing")
    photo: Optional[str] = Field(default=None, description="Public photo URL")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    category: str = Field(description="Category name")
    type: str = Field(description="Type name")
    status: str = Field(description="Status name")
    liked_by_users: List[int] = Field(
        default_factory=list,
        description="Ids of the users who liked the listing (unordered set)",
    )


class ListingDetail(BaseModel):
    """
    What:  Body of GET /listings/{id}.
    How:   Every column except the three reference ids, which appear instead
           as nested {id, name} objects.
    """
    id: int
    title: str
    description: str
    user_id: int
    photo: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: ReferenceOut
    type: ReferenceOut
    status: ReferenceOut
    liked_by_users: List[int] = Field(default_factory=list)


class MessageResponse(BaseModel):
    """Confirmation body for create / update / delete."""
    message: str = Field(description="Human-readable outcome, e.g. 'Listing created'")


class FieldUpdateResponse(MessageResponse):
    """
    Body of PATCH /listings/{id}/field.

    `message` names the first updated field only (status, category, type
    order); `fields` lists every field that was written.
    """
    fields: List[str] = Field(
        default_factory=list,
        description="Names of all reference fields applied, e.g. ['status', 'type']",
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ListingPayload(BaseModel):
    """
    Validated create / full-update payload.

    Sent as multipart form fields (alongside the optional `photo` file), so
    the route builds this model from Form() parameters. Reference ids are
    checked against their tables by the service, not here.
    """
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category_id: int = Field(ge=1)
    type_id: int = Field(ge=1)
    status_id: int = Field(ge=1)


class ListingFieldUpdate(BaseModel):
    """
    JSON body of PATCH /listings/{id}/field.

    Every key is optional; unknown keys are ignored. At least one of the
    three must be present and non-zero or the request is rejected with 400.
    Field declaration order is the order used to pick the message.
    """
    status_id: Optional[int] = None
    category_id: Optional[int] = None
    type_id: Optional[int] = None


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Listing not found",
            "request_id": "3f9a1c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    storage: str = Field(description="Object storage: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
