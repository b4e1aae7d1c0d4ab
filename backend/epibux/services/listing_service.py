"""Listing service — posting items for sale."""

import logging

from sqlalchemy.orm import Session

from epibux.database import run_transaction
from epibux.errors import NotFoundError
from epibux.models.listing import Listing
from epibux.models.user import User
from epibux.schemas.listing import ListingCreate

logger = logging.getLogger(__name__)


def create_listing(db: Session, seller_uid: str, req: ListingCreate) -> Listing:
    """Insert a new listing awaiting moderation.

    The request has already been validated. The seller's username is copied
    onto the listing so buyers never need to read the seller's profile.
    """

    def body(db: Session) -> Listing:
        seller = db.get(User, seller_uid)
        if not seller:
            raise NotFoundError("User creating post not found.", code="USER_NOT_FOUND")

        listing = Listing(
            title=req.title,
            description=req.description,
            price=req.price,
            link=req.link,
            is_infinite=req.is_infinite,
            stock=None if req.is_infinite else req.stock,
            seller_uid=seller.uid,
            seller_username=seller.username,
            is_accepted=False,
        )
        db.add(listing)
        return listing

    listing = run_transaction(db, body)
    logger.info("Listing submitted for review", extra={"uid": seller_uid, "listing_id": listing.id})
    return listing
