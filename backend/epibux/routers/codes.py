"""Codes router — minting and redeeming EB gift codes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from epibux.config import settings
from epibux.database import get_db
from epibux.middleware.auth import get_current_uid
from epibux.middleware.rate_limit import limiter
from epibux.schemas.code import (
    MintCodeRequest,
    MintCodeResponse,
    RedeemCodeRequest,
    RedeemCodeResponse,
)
from epibux.services import coin_service

router = APIRouter(tags=["codes"])


@router.post("/generate-code", response_model=MintCodeResponse)
@limiter.limit(settings.RATE_LIMIT)
def generate_code(
    request: Request,
    req: MintCodeRequest,
    db: Session = Depends(get_db),
    uid: str = Depends(get_current_uid),
):
    """Convert part of the caller's balance into a single-use code."""
    code = coin_service.mint_code(db, uid, req.amount)
    return MintCodeResponse(message="Code created successfully!", code=code)


@router.post("/redeem-code", response_model=RedeemCodeResponse)
@limiter.limit(settings.RATE_LIMIT)
def redeem_code(
    request: Request,
    req: RedeemCodeRequest,
    db: Session = Depends(get_db),
    uid: str = Depends(get_current_uid),
):
    """Redeem a code into the caller's balance."""
    amount = coin_service.redeem_code(db, uid, req.code)
    return RedeemCodeResponse(
        message=f"Successfully redeemed {amount:,} {settings.CURRENCY_LABEL}!",
        amount=amount,
    )
