"""
Listing API — Caller Identity
=============================

What:  FastAPI dependency resolving the id of the user making the request.
How:   Authentication itself happens upstream (API gateway / auth proxy),
       which forwards the verified user id in the X-User-ID header. With
       AUTH_BYPASS enabled every caller is DEV_USER_ID, for local work.
Who:   POST /listings, which records the caller as the listing owner.
"""

import logging
from typing import Optional

from fastapi import Header

from listing_api.config import settings
from listing_api.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-ID"),
) -> int:
    """
    Returns:
        The caller's user id.

    Raises:
        UnauthorizedError: Header missing or not a positive integer (and no
                           bypass configured).
    """
    if settings.auth_bypass:
        return settings.dev_user_id

    if not x_user_id:
        raise UnauthorizedError()

    try:
        user_id = int(x_user_id)
    except ValueError:
        logger.warning("Rejected malformed X-User-ID header: %r", x_user_id)
        raise UnauthorizedError()

    if user_id < 1:
        raise UnauthorizedError()
    return user_id
