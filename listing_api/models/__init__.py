# Importing every model registers it on Base.metadata (Alembic, create_all)
from listing_api.models.listing import Listing, listing_likes
from listing_api.models.reference import Category, ListingType, Status
from listing_api.models.user import User

__all__ = ["Listing", "listing_likes", "Category", "ListingType", "Status", "User"]
