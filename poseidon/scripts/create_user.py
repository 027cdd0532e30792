"""
Create a user (e.g. first admin). Run from project root:
  python -m poseidon.scripts.create_user USERNAME PASSWORD FULLNAME [role]
Example:
  python -m poseidon.scripts.create_user admin 'S3cure!pass' 'Administrator' admin
"""
import argparse
import logging
import sys

from poseidon.core.database import SessionLocal
from poseidon.core.exceptions import DuplicateUsernameError, ValidationError
from poseidon.core.roles import Role
from poseidon.schemas.forms import UserCreateForm, parse_form
from poseidon.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Poseidon user (bootstrap for the first admin).")
    parser.add_argument("username", help="Username (1-125 chars)")
    parser.add_argument("password", help="Password (8+ chars, a letter, a digit and one of @$!%%*#?&)")
    parser.add_argument("fullname", help="Display name")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    try:
        form = parse_form(
            UserCreateForm,
            {"username": args.username, "password": args.password, "fullname": args.fullname, "role": args.role},
        )
    except ValidationError as exc:
        for err in exc.errors:
            print(f"{err.field}: {err.message}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, form)
    except DuplicateUsernameError:
        print(f"User '{form.username}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user '%s' with role '%s' (id=%s).", form.username, form.role.value, user.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
