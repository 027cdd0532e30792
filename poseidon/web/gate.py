"""
Authorization gate: runs before every handler.

Paths are classified by the first matching rule in ACCESS_RULES; anything
unmatched needs an authenticated session. The session cookie is
resolved against the user store once here and the resulting Principal (or
None) is attached to request.state for handlers to read through
get_principal.
"""

import logging
from enum import Enum

import jwt
from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.config import settings
from poseidon.core.database import SessionLocal
from poseidon.core.exceptions import AccessDenied
from poseidon.core.roles import Capability
from poseidon.core.security import decode_session_token
from poseidon.schemas.auth import Principal
from poseidon.services.auth import principal_for_session
from poseidon.web.templating import render

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

# Ordered: first match wins. "/x/**" matches "/x" and everything below it.
ACCESS_RULES: tuple[tuple[str, Capability], ...] = (
    ("/", Capability.PUBLIC),
    (LOGIN_PATH, Capability.PUBLIC),
    ("/logout", Capability.PUBLIC),
    ("/health", Capability.PUBLIC),
    ("/user/**", Capability.ADMIN),
)


class Decision(str, Enum):
    PERMIT = "permit"
    LOGIN = "login"
    DENY = "deny"


def _matches(pattern: str, path: str) -> bool:
    if pattern.endswith("/**"):
        base = pattern[:-3]
        return path == base or path.startswith(base + "/")
    return path == pattern


def required_capability(path: str) -> Capability:
    """Capability a request path requires."""
    for pattern, capability in ACCESS_RULES:
        if _matches(pattern, path):
            return capability
    return Capability.AUTHENTICATED


def decide(capability: Capability, principal: Principal | None) -> Decision:
    if capability is Capability.PUBLIC:
        return Decision.PERMIT
    if principal is None:
        return Decision.LOGIN
    if principal.role.can(capability):
        return Decision.PERMIT
    return Decision.DENY


def principal_from_token(db: Session, token: str | None) -> Principal | None:
    """
    Resolve a session cookie to the current Principal.

    None for a missing, tampered or expired token, for a user that no longer
    exists, and for a session ended by logout. The role always comes from
    the stored user.
    """
    if not token:
        return None
    try:
        payload = decode_session_token(token)
        user_id = int(payload["sub"])
        session_version = payload["ver"]
    except jwt.PyJWTError:
        return None
    except (KeyError, TypeError, ValueError):
        logger.warning("Session token has an unexpected payload; ignoring it")
        return None
    if not isinstance(session_version, int):
        logger.warning("Session token has an unexpected payload; ignoring it")
        return None
    return principal_for_session(db, user_id, session_version)


def _session_principal(request: Request) -> Principal | None:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    db = SessionLocal()
    try:
        return principal_from_token(db, token)
    except SQLAlchemyError:
        logger.exception("Could not load the session user; treating request as anonymous")
        return None
    finally:
        db.close()


async def authorization_gate(request: Request, call_next) -> Response:
    """HTTP middleware: permit, redirect to the login form, or deny with 403."""
    principal = _session_principal(request)
    request.state.principal = principal

    path = request.url.path
    decision = decide(required_capability(path), principal)
    if decision is Decision.LOGIN:
        return RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    if decision is Decision.DENY:
        denied = AccessDenied(path, principal.role.value)
        logger.warning("Access denied: user id=%s %s", principal.id, denied)
        return render(
            request,
            "403.html",
            {"message": "You are not authorized to access the requested data."},
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return await call_next(request)


def get_principal(request: Request) -> Principal:
    """Dependency: principal of the current session (the gate has already required one)."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return principal
