"""Web routes (HTML)."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from sessionflash.config import get_settings
from sessionflash.web import render

router = APIRouter()


@router.get("/", response_class=HTMLResponse, tags=["web"])
def index(request: Request) -> HTMLResponse:
    """Render home page with any pending flash messages."""
    return render(request, "index.html", {"title": get_settings().app_name})
