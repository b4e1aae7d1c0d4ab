"""Marketplace router — posting and buying listings."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from epibux.config import settings
from epibux.database import get_db
from epibux.middleware.auth import get_current_uid
from epibux.middleware.rate_limit import limiter
from epibux.schemas.listing import (
    ListingCreate,
    ListingCreatedResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from epibux.services import listing_service, trade_service

router = APIRouter(tags=["marketplace"])


@router.post("/create-post", response_model=ListingCreatedResponse)
@limiter.limit(settings.RATE_LIMIT)
def create_post(
    request: Request,
    req: ListingCreate,
    db: Session = Depends(get_db),
    uid: str = Depends(get_current_uid),
):
    """Submit a listing for moderator review."""
    listing_service.create_listing(db, uid, req)
    return ListingCreatedResponse(
        message="Submitted for review, notify an admin so they can accept it.",
    )


@router.post("/buy-item", response_model=PurchaseResponse)
@limiter.limit(settings.RATE_LIMIT)
def buy_item(
    request: Request,
    req: PurchaseRequest,
    db: Session = Depends(get_db),
    uid: str = Depends(get_current_uid),
):
    """Buy one unit of an accepted listing."""
    link = trade_service.purchase_listing(db, uid, req.post_id)
    return PurchaseResponse(message="Purchase successful!", link=link)
