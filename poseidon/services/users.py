"""User administration: hashing on write, hash preserved on blank password."""

import logging

from sqlalchemy.orm import Session

from poseidon.core.exceptions import DuplicateUsernameError
from poseidon.core.security import hash_password
from poseidon.models import User
from poseidon.schemas.forms import UserCreateForm, UserUpdateForm
from poseidon.services.crud import CrudService

logger = logging.getLogger(__name__)

user_service: CrudService[User] = CrudService(User, "user")


def find_by_username(db: Session, username: str) -> User | None:
    """Exact-match lookup; None on miss."""
    return db.query(User).filter(User.username == username).first()


def _ensure_username_free(db: Session, username: str, exclude_id: int | None = None) -> None:
    existing = find_by_username(db, username)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateUsernameError(username)


def create_user(db: Session, form: UserCreateForm) -> User:
    """Persist a new user. The plaintext password is hashed and not kept."""
    _ensure_username_free(db, form.username)
    return user_service.create(
        db,
        {
            "username": form.username,
            "password_hash": hash_password(form.password),
            "fullname": form.fullname,
            "role": form.role.value,
        },
    )


def update_user(db: Session, user_id: int, form: UserUpdateForm) -> User:
    """
    Update an existing user.

    A blank password on the form leaves the stored hash untouched; a non-blank
    one is re-hashed and replaces it.
    """
    user_service.get(db, user_id)
    _ensure_username_free(db, form.username, exclude_id=user_id)
    values = {
        "username": form.username,
        "fullname": form.fullname,
        "role": form.role.value,
    }
    if form.password:
        values["password_hash"] = hash_password(form.password)
    else:
        logger.debug("Password left blank for user id=%s; keeping stored hash", user_id)
    return user_service.update(db, user_id, values)
