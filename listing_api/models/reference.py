"""
Listing API — Reference Table Models
====================================

What:  Lookup tables a Listing points to: categories, types, statuses.
       Rows are seeded by migrations or administrators; this service only
       reads them (existence checks and display names).

By convention statuses.id = 1 is "active".
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from listing_api.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class ListingType(Base):
    """Kind of offer, e.g. sale, rent, swap. Table name is `types`."""

    __tablename__ = "types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<ListingType(id={self.id}, name='{self.name}')>"


class Status(Base):
    __tablename__ = "statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Status(id={self.id}, name='{self.name}')>"
