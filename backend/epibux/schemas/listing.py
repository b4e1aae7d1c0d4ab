"""Listing and purchase request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from epibux.config import settings
from epibux.schemas.common import is_whole_number

MISSING_FIELDS_MSG = "Missing required fields."
INVALID_STOCK_MSG = "A valid stock number is required for non-infinite items."


def invalid_price_msg() -> str:
    return (
        f"Price is invalid. Must be a whole number between "
        f"{settings.MIN_LISTING_PRICE:,} and {settings.MAX_LISTING_PRICE:,}."
    )


class ListingCreate(BaseModel):
    title: str
    description: str
    price: int
    link: str
    is_infinite: bool = Field(default=False, alias="isInfinite")
    stock: Optional[int] = None  # required when is_infinite is false

    class Config:
        populate_by_name = True

    @field_validator("title", "description", "link")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(MISSING_FIELDS_MSG)
        return v

    @field_validator("price", mode="before")
    @classmethod
    def _price_in_range(cls, v):
        if not is_whole_number(v):
            raise ValueError(invalid_price_msg())
        if not settings.MIN_LISTING_PRICE <= v <= settings.MAX_LISTING_PRICE:
            raise ValueError(invalid_price_msg())
        return int(v)

    @field_validator("stock", mode="before")
    @classmethod
    def _stock_positive(cls, v, info: ValidationInfo):
        # Unlimited listings carry no stock, whatever the client sent.
        if info.data.get("is_infinite"):
            return None
        if v is None:
            return None
        if not is_whole_number(v) or v <= 0:
            raise ValueError(INVALID_STOCK_MSG)
        return int(v)

    @model_validator(mode="after")
    def _stock_required_when_finite(self):
        if not self.is_infinite and self.stock is None:
            raise ValueError(INVALID_STOCK_MSG)
        return self


class ListingCreatedResponse(BaseModel):
    message: str


class PurchaseRequest(BaseModel):
    post_id: str = Field(alias="postId")

    class Config:
        populate_by_name = True

    @field_validator("post_id")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Post ID is missing.")
        return v.strip()


class PurchaseResponse(BaseModel):
    message: str
    link: str
