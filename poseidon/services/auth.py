"""Authentication provider: user lookup and credential verification."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.exceptions import BadCredentials, CredentialsNotFound
from poseidon.core.roles import Role
from poseidon.core.security import DUMMY_PASSWORD_HASH, verify_password
from poseidon.models import User
from poseidon.schemas.auth import Principal
from poseidon.services.users import find_by_username

logger = logging.getLogger(__name__)


def load_principal(db: Session, username: str) -> User:
    """Return the user with exactly this username. Raises CredentialsNotFound on miss."""
    user = find_by_username(db, username)
    if user is None:
        raise CredentialsNotFound()
    return user


def authenticate(db: Session, username: str, password: str) -> Principal:
    """
    Check credentials and return the principal for a new session.

    Unknown usernames and wrong passwords both raise BadCredentials. An unknown
    username is still verified against a dummy hash so both paths take the
    same time.
    """
    try:
        user = load_principal(db, username)
    except CredentialsNotFound:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Login failed: unknown username")
        raise BadCredentials() from None

    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for user id=%s", user.id)
        raise BadCredentials()

    try:
        role = Role(user.role)
    except ValueError:
        logger.warning("User id=%s has unknown role %r; refusing login", user.id, user.role)
        raise BadCredentials() from None

    logger.info("Login succeeded for user id=%s role=%s", user.id, role.value)
    return Principal(id=user.id, username=user.username, role=role, session_version=user.session_version)


def principal_for_session(db: Session, user_id: int, session_version: int) -> Principal | None:
    """
    Resolve a session cookie's claims against the user store.

    None when the user is gone, the session was ended by a logout, or the
    stored role is not a known Role.
    """
    user = db.get(User, user_id)
    if user is None:
        logger.info("Session refused: user id=%s no longer exists", user_id)
        return None
    if user.session_version != session_version:
        logger.info("Session refused: user id=%s has logged out since", user_id)
        return None
    try:
        role = Role(user.role)
    except ValueError:
        logger.warning("Session refused: user id=%s has unknown role %r", user_id, user.role)
        return None
    return Principal(id=user.id, username=user.username, role=role, session_version=user.session_version)


def end_sessions(db: Session, user_id: int) -> None:
    """Invalidate every session cookie issued so far to this user."""
    user = db.get(User, user_id)
    if user is None:
        return
    user.session_version = (user.session_version or 0) + 1
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Ending sessions for user id=%s failed", user_id)
        raise
    logger.info("Sessions ended for user id=%s", user_id)
