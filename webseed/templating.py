"""
Jinja2 template rendering for page routes.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from webseed.errors import AppError, AppErrorKind

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def create_templates(directory: Path | str = TEMPLATES_DIR) -> Jinja2Templates:
    return Jinja2Templates(directory=str(directory))


def render_page(
    templates: Jinja2Templates,
    request: Request,
    name: str,
    status_code: int = 200,
    **fields: Any,
) -> HTMLResponse:
    """Render ``name`` with ``fields`` into an HTML response.

    Raises:
        AppError: UI_ERROR when the template is missing or fails to render
    """
    try:
        return templates.TemplateResponse(request, name, fields, status_code=status_code)
    except TemplateError as exc:
        raise AppError(AppErrorKind.UI_ERROR, detail=f"{name}: {exc}") from exc
