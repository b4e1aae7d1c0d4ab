"""Redeem code model — escrowed balance, consumed exactly once."""

from sqlalchemy import Column, String, Integer

from epibux.database import Base


class RedeemCode(Base):
    __tablename__ = "redeem_codes"

    code = Column(String(64), primary_key=True)
    amount = Column(Integer, nullable=False)
    # Versioned so two redeemers racing on the same row cannot both delete it.
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
