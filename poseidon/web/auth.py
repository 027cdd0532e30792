"""Form login and logout: the session boundary."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.config import settings
from poseidon.core.database import get_db
from poseidon.core.exceptions import AuthenticationError
from poseidon.core.security import create_session_token
from poseidon.services.auth import authenticate, end_sessions
from poseidon.web.templating import render

logger = logging.getLogger(__name__)

router = APIRouter()

# Landing view after a successful login.
DEFAULT_SUCCESS_URL = "/bidList/list"


@router.get("/login")
def login_form(request: Request, logout: str | None = None):
    """Render the login form; ?logout shows the signed-out notice."""
    return render(request, "login.html", {"error": None, "logged_out": logout is not None, "username": ""})


@router.post("/login")
def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """
    Verify credentials and open a session.

    Unknown username and wrong password produce the same response.
    """
    try:
        principal = authenticate(db, username.strip(), password)
    except AuthenticationError as exc:
        return render(
            request,
            "login.html",
            {"error": exc.message, "logged_out": False, "username": username},
        )

    token = create_session_token(principal.id, principal.session_version)
    response = RedirectResponse(url=DEFAULT_SUCCESS_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response


@router.api_route("/logout", methods=["GET", "POST"])
def logout(request: Request, db: Annotated[Session, Depends(get_db)]):
    """
    End the session and return to the login form.

    Every cookie issued to the user so far stops working, not only the one
    this browser is dropping.
    """
    principal = getattr(request.state, "principal", None)
    if principal is not None:
        logger.info("Logout for user id=%s", principal.id)
        try:
            end_sessions(db, principal.id)
        except SQLAlchemyError:
            logger.error("Logout for user id=%s could not revoke the session server-side", principal.id)
    response = RedirectResponse(url="/login?logout", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
