"""ORM model for named rules."""

from sqlalchemy import Column, Integer, String, Text

from poseidon.models.base import Base


class RuleName(Base):
    __tablename__ = "rulename"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(125), nullable=False)
    description = Column(String(125), nullable=False)
    json_str = Column("json", Text, nullable=True)
    template = Column(String(512), nullable=True)
    sql_str = Column(Text, nullable=True)
    sql_part = Column(Text, nullable=True)
