"""
Listing API — Listing SQLAlchemy Model
======================================

What:  ORM model for the `listings` table and the `listing_likes`
       association table (the liked-by relation).
Who:   Used by ListingService for CRUD operations and by Alembic.

Table Design:
    - Integer primary key, exposed in URLs (/listings/{id})
    - title / description: user-supplied text
    - user_id: creator; set from the caller identity, never from the payload
    - category_id / type_id / status_id: references, exactly one each
    - photo: public URL returned by object storage (nullable)
    - created_at / updated_at: UTC, updated_at refreshed on every UPDATE

Query Patterns:
    - Active listings: WHERE status_id = :active → idx_listings_status_id
    - Single listing:  WHERE id = :id → primary key
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    TIMESTAMP,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listing_api.database import Base

if TYPE_CHECKING:
    from listing_api.models.reference import Category, ListingType, Status
    from listing_api.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Composite primary key: a user likes a listing at most once
listing_likes = Table(
    "listing_likes",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("listing_id", Integer, ForeignKey("listings.id", ondelete="CASCADE"), primary_key=True),
)


class Listing(Base):
    """
    An item offered on the marketplace.

    Lifecycle:
        1. Created by POST /listings, owner = authenticated caller
        2. Mutated by PUT/PATCH /listings/{id} and PATCH /listings/{id}/field
        3. Deleted by DELETE /listings/{id}; its like rows go with it

    Only status_id == settings.active_status_id carries meaning here (shown by
    GET /listings); other status values are opaque.
    """

    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Creator of the listing",
    )
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False)
    type_id: Mapped[int] = mapped_column(ForeignKey("types.id"), nullable=False)
    status_id: Mapped[int] = mapped_column(ForeignKey("statuses.id"), nullable=False)

    photo: Mapped[Optional[str]] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
        comment="Public URL of the listing photo in object storage",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # ── Relationships ─────────────────────────────────────────────────────
    # Async sessions cannot lazy-load: every query that reads these must
    # eager-load them (selectinload).
    user: Mapped["User"] = relationship(back_populates="listings")
    category: Mapped["Category"] = relationship()
    type: Mapped["ListingType"] = relationship()
    status: Mapped["Status"] = relationship()
    liked_by_users: Mapped[List["User"]] = relationship(
        secondary=listing_likes,
        back_populates="liked_listings",
    )

    __table_args__ = (
        Index("idx_listings_status_id", "status_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Listing(id={self.id}, title='{self.title}', "
            f"status_id={self.status_id})>"
        )
