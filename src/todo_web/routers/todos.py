from __future__ import annotations

import logging
import os
import re
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse

from ..errors import StorageError, ValidationError
from ..rendering import STATIC_DIR, render_index
from ..store import TodoStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"], redirect_slashes=False)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


# PUBLIC_INTERFACE
def get_store(request: Request) -> TodoStore:
    """Dependency returning the store attached to the running application."""
    return request.app.state.store


# PUBLIC_INTERFACE
def parse_id(raw: Optional[str]) -> int:
    """
    Parse a base-10 signed 64-bit integer form value.

    Raises:
        ValidationError: for missing, blank, non-decimal or out-of-range input.
    """
    if raw is None or not _ID_PATTERN.fullmatch(raw):
        raise ValidationError()
    value = int(raw)
    if not (_ID_MIN <= value <= _ID_MAX):
        raise ValidationError()
    return value


def _see_other() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


# PUBLIC_INTERFACE
@router.api_route(
    "/",
    methods=["GET", "HEAD", "POST"],
    response_class=HTMLResponse,
    summary="Todo list page",
)
def index(request: Request, store: TodoStore = Depends(get_store)) -> HTMLResponse:
    """
    List every todo followed by the create form. A failing query is logged
    and the page renders as if there were no todos.
    """
    notice = None
    try:
        todos = store.list()
    except StorageError as exc:
        logger.exception("Error listing todos")
        todos = []
        notice = f"Error listing todos: {exc}"
    return render_index(request, todos, request.app.state.settings.app_name, notice=notice)


# PUBLIC_INTERFACE
@router.post("/create", summary="Create todo")
def create_todo(
    title: Optional[str] = Form(None),
    store: TodoStore = Depends(get_store),
) -> RedirectResponse:
    """Insert a todo when ``title`` is non-empty, then redirect to the list."""
    if title:
        store.create(title)
    return _see_other()


# PUBLIC_INTERFACE
@router.post("/toggle", summary="Toggle todo")
def toggle_todo(
    todo_id: Optional[str] = Form(None, alias="id"),
    store: TodoStore = Depends(get_store),
) -> RedirectResponse:
    """Flip the completion flag of todo ``id``."""
    store.toggle(parse_id(todo_id))
    return _see_other()


# PUBLIC_INTERFACE
@router.post("/delete", summary="Delete todo")
def delete_todo(
    todo_id: Optional[str] = Form(None, alias="id"),
    store: TodoStore = Depends(get_store),
) -> RedirectResponse:
    """Delete todo ``id``."""
    store.delete(parse_id(todo_id))
    return _see_other()


def redirect_home() -> RedirectResponse:
    """Mutation endpoints answer anything but POST with a redirect to the list."""
    return _see_other()


for _path in ("/create", "/toggle", "/delete"):
    router.add_api_route(
        _path,
        redirect_home,
        methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )


@router.get("/favicon.ico", include_in_schema=False)
def favicon() -> FileResponse:
    return FileResponse(os.path.join(STATIC_DIR, "favicon.svg"), media_type="image/svg+xml")
