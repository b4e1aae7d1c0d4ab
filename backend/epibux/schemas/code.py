"""Redeem code request/response schemas."""

from pydantic import BaseModel, field_validator

from epibux.schemas.common import is_whole_number

INVALID_AMOUNT_MSG = "Amount is missing or invalid."


class MintCodeRequest(BaseModel):
    amount: int

    @field_validator("amount", mode="before")
    @classmethod
    def _positive_whole(cls, v):
        # Numeric strings are accepted, e.g. "250", "5.0" or "1e2" from a form field.
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                raise ValueError(INVALID_AMOUNT_MSG)
        if not is_whole_number(v) or v <= 0:
            raise ValueError(INVALID_AMOUNT_MSG)
        return int(v)


class MintCodeResponse(BaseModel):
    message: str
    code: str


class RedeemCodeRequest(BaseModel):
    code: str

    @field_validator("code")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Code is missing.")
        return v.upper()


class RedeemCodeResponse(BaseModel):
    message: str
    amount: int
