"""Schemas for the authenticated principal carried by a session."""

from pydantic import BaseModel, ConfigDict

from poseidon.core.roles import Role


class Principal(BaseModel):
    """
    Authenticated user attached to a request.

    Built from the stored user on every request; session_version is the
    value a session cookie must carry to stay valid.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    role: Role
    session_version: int = 0
