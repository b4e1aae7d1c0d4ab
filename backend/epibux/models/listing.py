"""Listing model — an item posted for sale on the marketplace."""

import uuid

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, func

from epibux.database import Base


class Listing(Base):
    __tablename__ = "listings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    link = Column(Text, nullable=False)
    is_infinite = Column(Boolean, nullable=False, default=False)
    stock = Column(Integer, nullable=True)  # NULL iff is_infinite
    seller_uid = Column(String(128), ForeignKey("users.uid"), nullable=False)
    seller_username = Column(String(255), nullable=False)
    # Flipped by moderators outside this service.
    is_accepted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
