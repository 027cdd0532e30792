"""ORM model for trades."""

from sqlalchemy import Column, DateTime, Float, Integer, String, func

from poseidon.models.base import Base


class Trade(Base):
    __tablename__ = "trade"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(String(30), nullable=False)
    type = Column(String(30), nullable=False)
    buy_quantity = Column(Float, nullable=True)
    creation_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    revision_date = Column(DateTime(timezone=True), nullable=True)
