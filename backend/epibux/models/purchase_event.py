"""Purchase event — immutable audit record of every purchase."""

import uuid

from sqlalchemy import Column, String, DateTime, func

from epibux.database import Base


class PurchaseEvent(Base):
    __tablename__ = "purchase_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    buyer_username = Column(String(255), nullable=False)
    item_title = Column(String(500), nullable=False)
    timestamp = Column(DateTime, nullable=False, server_default=func.now())
