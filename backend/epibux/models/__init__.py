"""SQLAlchemy ORM models."""

from epibux.models.user import User
from epibux.models.listing import Listing
from epibux.models.redeem_code import RedeemCode
from epibux.models.notification import Notification
from epibux.models.purchase_event import PurchaseEvent

__all__ = [
    "User",
    "Listing",
    "RedeemCode",
    "Notification",
    "PurchaseEvent",
]
