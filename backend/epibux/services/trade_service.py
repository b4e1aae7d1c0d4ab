"""Trade service — buying listings with EB."""

import logging

from sqlalchemy.orm import Session

from epibux.database import run_transaction
from epibux.errors import BusinessRuleError, NotFoundError
from epibux.models.listing import Listing
from epibux.models.notification import Notification
from epibux.models.purchase_event import PurchaseEvent
from epibux.models.user import User

logger = logging.getLogger(__name__)


def purchase_listing(db: Session, buyer_uid: str, listing_id: str) -> str:
    """Buy one unit of a listing and return its link.

    Steps, all within a single DB transaction:
    1. Check the listing exists, is accepted, and has stock
    2. Reject self-purchase
    3. Check the buyer can afford it
    4. Move ``price`` EB from buyer to seller
    5. Insert a seller notification and a purchase event
    6. Decrement finite stock, deleting the listing at zero

    Every read happens before any write. If the listing or either user row
    changed after we read it, the commit fails its version check and the
    whole purchase is rolled back.
    """

    def body(db: Session) -> str:
        listing = db.get(Listing, listing_id, with_for_update=True)
        if not listing:
            raise NotFoundError("This item is no longer available.", code="NOT_AVAILABLE")
        if listing.is_accepted is not True:
            raise BusinessRuleError("This item is not available for purchase yet.", code="NOT_ACCEPTED_YET")
        if not listing.is_infinite and (listing.stock is None or listing.stock <= 0):
            raise BusinessRuleError("This item is out of stock.", code="OUT_OF_STOCK")

        price = listing.price
        if buyer_uid == listing.seller_uid:
            raise BusinessRuleError("You cannot buy your own item.", code="SELF_PURCHASE")

        buyer = db.get(User, buyer_uid, with_for_update=True)
        if not buyer:
            raise NotFoundError("Your user profile could not be found.", code="PROFILE_MISSING")
        if buyer.balance < price:
            raise BusinessRuleError("You have insufficient funds for this purchase.", code="INSUFFICIENT_FUNDS")

        seller = db.get(User, listing.seller_uid, with_for_update=True)
        if not seller:
            raise NotFoundError("The seller's profile could not be found.", code="SELLER_NOT_FOUND")

        # Writes start here.
        buyer.balance -= price
        seller.balance += price

        db.add(Notification(
            seller_uid=seller.uid,
            buyer_username=buyer.username,
            product_title=listing.title,
            is_read=False,
        ))
        db.add(PurchaseEvent(
            buyer_username=buyer.username,
            item_title=listing.title,
        ))

        if not listing.is_infinite:
            new_stock = listing.stock - 1
            if new_stock > 0:
                listing.stock = new_stock
            else:
                db.delete(listing)

        return listing.link

    link = run_transaction(db, body)
    logger.info("Listing purchased", extra={"uid": buyer_uid, "listing_id": listing_id})
    return link
