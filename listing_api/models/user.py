"""
Listing API — User Model
========================

What:  Minimal `users` table. Account management lives elsewhere; this
       service needs the id (listing owner, liked-by set) and nothing more.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import TIMESTAMP, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from listing_api.database import Base
from listing_api.models.listing import listing_likes

if TYPE_CHECKING:
    from listing_api.models.listing import Listing


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    listings: Mapped[List["Listing"]] = relationship(back_populates="user")
    liked_listings: Mapped[List["Listing"]] = relationship(
        secondary=listing_likes,
        back_populates="liked_by_users",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
