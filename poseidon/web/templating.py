"""Jinja2 environment and the render helper every view goes through."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    template_name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
):
    """TemplateResponse wrapper injecting the session principal."""
    base_ctx = {"principal": getattr(request.state, "principal", None)}
    return templates.TemplateResponse(
        request,
        template_name,
        {**base_ctx, **(context or {})},
        status_code=status_code,
    )
