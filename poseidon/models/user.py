"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String

from poseidon.models.base import Base


class User(Base):
    """
    User account for form login and role-based access control.

    password_hash: bcrypt digest, never the plaintext.
    role: 'admin' or 'user'; read on every request, so changes apply at once
    session_version: bumped at logout; session cookies carrying an older value are refused
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(125), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    fullname = Column(String(125), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    session_version = Column(Integer, nullable=False, default=0, server_default="0")
