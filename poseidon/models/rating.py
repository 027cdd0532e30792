"""ORM model for agency ratings."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class Rating(Base):
    """Moody's, S&P and Fitch ratings plus an ordering key."""

    __tablename__ = "rating"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moodys_rating = Column(String(125), nullable=False)
    sand_p_rating = Column(String(125), nullable=False)
    fitch_rating = Column(String(125), nullable=False)
    order_number = Column(Integer, nullable=True)
