"""ORM model for points on a curve."""

from sqlalchemy import Column, DateTime, Float, Integer, func

from poseidon.models.base import Base


class CurvePoint(Base):
    __tablename__ = "curvepoint"

    id = Column(Integer, primary_key=True, autoincrement=True)
    curve_id = Column(Integer, nullable=False, index=True)
    as_of_date = Column(DateTime(timezone=True), nullable=True)
    term = Column(Float, nullable=False)
    value = Column(Float, nullable=False)
    creation_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
