from __future__ import annotations

import os
from typing import Optional, Sequence

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Todo

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")
PAGE_TEMPLATE = "todo.html"

# Titles are user input; every .html template is autoescaped.
_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)
templates = Jinja2Templates(env=_env)


# PUBLIC_INTERFACE
def render_index(
    request: Request,
    todos: Sequence[Todo],
    app_name: str,
    notice: Optional[str] = None,
) -> HTMLResponse:
    """
    Render the todo list page: one row per todo (toggle checkbox, escaped
    title, delete button) followed by the create form.
    """
    context = {
        "app_name": app_name,
        "todos": list(todos),
        "notice": notice,
    }
    return templates.TemplateResponse(request, PAGE_TEMPLATE, context)
