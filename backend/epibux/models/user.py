"""User model — balances live here and are only changed inside transactions."""

from sqlalchemy import Column, String, Integer

from epibux.database import Base


class User(Base):
    __tablename__ = "users"

    # Assigned by the identity provider; this service never creates users.
    uid = Column(String(128), primary_key=True)
    username = Column(String(255), nullable=False)
    balance = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
