"""Router factory: the list/add/validate/update/delete flow shared by every entity."""

import logging
from typing import Annotated, Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poseidon.core.database import get_db
from poseidon.core.exceptions import DuplicateUsernameError, FieldError, NotFoundError
from poseidon.schemas.forms import validate_form
from poseidon.web.entities import EntityView
from poseidon.web.templating import render

logger = logging.getLogger(__name__)


def _errors_by_field(errors: list[FieldError]) -> dict[str, list[str]]:
    out: dict[str, list[str]] = {}
    for err in errors:
        out.setdefault(err.field, []).append(err.message)
    return out


def _redirect(url: str, error: str | None = None) -> RedirectResponse:
    if error:
        url = f"{url}?{urlencode({'error': error})}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


async def _submitted(request: Request) -> dict[str, str]:
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def build_crud_router(view: EntityView) -> APIRouter:
    """Create the six form routes for one entity under /{view.name}."""
    router = APIRouter(prefix=f"/{view.name}", tags=[view.name])

    def render_form(
        request: Request,
        mode: str,
        values: dict[str, Any],
        errors: list[FieldError] | None = None,
        error: str | None = None,
        record_id: int | None = None,
    ):
        # Secrets are never echoed back into a form.
        shown = {f.name: ("" if f.blank_on_edit else values.get(f.name, "")) for f in view.fields}
        action = f"/{view.name}/validate" if mode == "add" else f"/{view.name}/update/{record_id}"
        return render(
            request,
            "crud/form.html",
            {
                "view": view,
                "mode": mode,
                "action": action,
                "record_id": record_id,
                "values": shown,
                "errors": _errors_by_field(errors or []),
                "error": error,
            },
        )

    @router.get("/list")
    def list_records(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        error: str | None = None,
    ):
        records = view.service.list_all(db)
        return render(request, "crud/list.html", {"view": view, "records": records, "error": error})

    @router.get("/add")
    def add_form(request: Request):
        return render_form(request, "add", {})

    @router.post("/validate")
    async def create_record(request: Request, db: Annotated[Session, Depends(get_db)]):
        submitted = await _submitted(request)
        form, errors = validate_form(view.create_form, submitted)
        if form is None:
            return render_form(request, "add", submitted, errors=errors)
        try:
            view.create(db, form)
        except DuplicateUsernameError as exc:
            return render_form(request, "add", submitted, errors=[FieldError("username", str(exc))])
        except SQLAlchemyError:
            return render_form(request, "add", submitted, error=f"Could not save {view.name}")
        return _redirect(view.list_url)

    @router.get("/update/{record_id}")
    def update_form(request: Request, record_id: int, db: Annotated[Session, Depends(get_db)]):
        try:
            record = view.service.get(db, record_id)
        except NotFoundError as exc:
            return _redirect(view.list_url, exc.message)
        except SQLAlchemyError:
            logger.exception("Loading %s id=%s failed", view.name, record_id)
            return _redirect(view.list_url, f"Could not load {view.name}")
        return render_form(request, "update", view.values_from(record), record_id=record_id)

    @router.post("/update/{record_id}")
    async def update_record(request: Request, record_id: int, db: Annotated[Session, Depends(get_db)]):
        submitted = await _submitted(request)
        form, errors = validate_form(view.form_for_update(), submitted)
        if form is None:
            return render_form(request, "update", submitted, errors=errors, record_id=record_id)
        try:
            view.update(db, record_id, form)
        except NotFoundError as exc:
            logger.info("Update rejected: %s", exc.message)
            return render_form(request, "update", submitted, error=exc.message, record_id=record_id)
        except DuplicateUsernameError as exc:
            return render_form(
                request, "update", submitted, errors=[FieldError("username", str(exc))], record_id=record_id
            )
        except SQLAlchemyError:
            return render_form(request, "update", submitted, error=f"Could not save {view.name}", record_id=record_id)
        return _redirect(view.list_url)

    @router.get("/delete/{record_id}")
    def delete_record(record_id: int, db: Annotated[Session, Depends(get_db)]):
        try:
            view.service.delete(db, record_id)
        except NotFoundError as exc:
            logger.info("Delete rejected: %s", exc.message)
            return _redirect(view.list_url, exc.message)
        except SQLAlchemyError:
            return _redirect(view.list_url, f"Could not delete {view.name}")
        return _redirect(view.list_url)

    return router
