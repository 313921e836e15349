"""Jinja integration and helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from sessionflash.utils.messages import flash_messages

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
    with_messages: bool = True,
) -> HTMLResponse:
    """
    Render a template with the live flash messages of this request.

    Pass ``with_messages=False`` when the response is built outside the session
    middleware: reads there are never saved back to the cookie.
    """
    ctx: dict[str, Any] = {
        "messages": flash_messages(request) if with_messages else [],
    }
    if context:
        ctx.update(context)
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
