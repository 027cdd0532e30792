"""Closed set of roles and the capabilities each one grants."""

from enum import Enum


class Capability(str, Enum):
    """What a path requires of the caller."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


class Role(str, Enum):
    """Role stored on a user record; the only source of authority in a session."""

    ADMIN = "admin"
    USER = "user"

    def can(self, capability: Capability) -> bool:
        return capability in _GRANTS[self]


_GRANTS: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset({Capability.PUBLIC, Capability.AUTHENTICATED, Capability.ADMIN}),
    Role.USER: frozenset({Capability.PUBLIC, Capability.AUTHENTICATED}),
}
