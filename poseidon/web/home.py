"""Home page and the legacy admin landing redirect."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from poseidon.schemas.auth import Principal
from poseidon.web.auth import DEFAULT_SUCCESS_URL
from poseidon.web.entities import ENTITY_VIEWS
from poseidon.web.gate import get_principal
from poseidon.web.templating import render

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def home(request: Request):
    """Public landing page."""
    return render(request, "home.html", {"views": ENTITY_VIEWS})


@router.get("/admin/home")
def admin_home(principal: Annotated[Principal, Depends(get_principal)]):
    logger.debug("Admin home for user id=%s; redirecting to %s", principal.id, DEFAULT_SUCCESS_URL)
    return RedirectResponse(url=DEFAULT_SUCCESS_URL, status_code=status.HTTP_303_SEE_OTHER)
