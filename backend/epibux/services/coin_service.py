"""Coin service — minting and redeeming EB gift codes.

Minting moves balance into a code; redeeming moves it back out. The sum of
all balances plus all outstanding code amounts never changes.
"""

import logging
import secrets
import string

from sqlalchemy.orm import Session

from epibux.config import settings
from epibux.database import run_transaction
from epibux.errors import BusinessRuleError, NotFoundError, TransientConflictError
from epibux.models.redeem_code import RedeemCode
from epibux.models.user import User

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_code(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def _allocate_code(db: Session) -> str:
    """Draw codes until one is not already in use."""
    for _ in range(settings.REDEEM_CODE_MAX_ATTEMPTS):
        code = generate_code(settings.REDEEM_CODE_LENGTH)
        if db.get(RedeemCode, code) is None:
            return code
    raise TransientConflictError("Could not allocate a unique code. Please try again.")


def mint_code(db: Session, uid: str, amount: int) -> str:
    """Deduct ``amount`` from the user's balance and return a new code worth it."""

    def body(db: Session) -> str:
        user = db.get(User, uid, with_for_update=True)
        if not user:
            raise NotFoundError("User profile not found.", code="USER_NOT_FOUND")
        if not isinstance(user.balance, int):
            raise BusinessRuleError("Invalid balance data. Please contact an admin.", code="INVALID_BALANCE")
        if user.balance < amount:
            raise BusinessRuleError("Insufficient balance.", code="INSUFFICIENT_BALANCE")

        code = _allocate_code(db)

        user.balance -= amount
        db.add(RedeemCode(code=code, amount=amount))
        return code

    code = run_transaction(db, body)
    logger.info("Code minted", extra={"uid": uid, "amount": amount})
    return code


def redeem_code(db: Session, uid: str, code: str) -> int:
    """Credit the code's amount to the user and consume the code.

    A missing code means either it never existed or it was already used; the
    two cases are deliberately indistinguishable.
    """

    def body(db: Session) -> int:
        redeem = db.get(RedeemCode, code, with_for_update=True)
        if not redeem:
            raise NotFoundError("Invalid or already used code.", code="INVALID_OR_USED_CODE")
        amount = redeem.amount

        user = db.get(User, uid, with_for_update=True)
        if not user:
            raise NotFoundError("User profile not found.", code="USER_NOT_FOUND")

        user.balance += amount
        db.delete(redeem)
        return amount

    amount = run_transaction(db, body)
    logger.info("Code redeemed", extra={"uid": uid, "amount": amount})
    return amount
