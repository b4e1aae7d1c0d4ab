"""Seller notification, appended on every purchase."""

import uuid

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, func

from epibux.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    seller_uid = Column(String(128), ForeignKey("users.uid"), nullable=False, index=True)
    buyer_username = Column(String(255), nullable=False)
    product_title = Column(String(500), nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, nullable=False, server_default=func.now())
