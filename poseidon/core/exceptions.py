"""Error taxonomy shared by services, routers and the authorization gate."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """One rejected form field and the message shown next to it."""

    field: str
    message: str


class ValidationError(Exception):
    """Form input failed per-field constraints; nothing was persisted."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class NotFoundError(Exception):
    """Update or delete target does not exist."""

    def __init__(self, entity: str, message: str) -> None:
        self.entity = entity
        self.message = message
        super().__init__(message)


class DuplicateUsernameError(Exception):
    """Another user already holds the requested username."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username is already taken")


class AuthenticationError(Exception):
    """Base for login failures. The user-facing message is always the same."""

    message = "Invalid username or password."

    def __init__(self) -> None:
        super().__init__(self.message)


class CredentialsNotFound(AuthenticationError):
    """No user with the given username."""


class BadCredentials(AuthenticationError):
    """Username unknown or password does not match."""


class AccessDenied(Exception):
    """Authenticated principal lacks the capability a path requires."""

    def __init__(self, path: str, role: str) -> None:
        self.path = path
        self.role = role
        super().__init__(f"Role '{role}' may not access {path}")
