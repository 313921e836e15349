"""Infra routes: health check and flash demo helpers."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from sessionflash.config import get_settings
from sessionflash.flash import FlashStore
from sessionflash.utils.htmx import redirect_after_post
from sessionflash.utils.messages import add_message, flash_store

router = APIRouter()


@router.get("/health", tags=["infra"])
def health() -> dict[str, str]:
    """Return basic service health."""
    return {"status": "ok"}


@router.get("/demo/flash", tags=["infra"])
def demo_flash(
    request: Request,
    msg: str = "Operation completed",
    level: str = "success",
    remove_after_access: bool = True,
) -> Response:
    """Add a one-time message and redirect to home (HTMX-aware)."""
    add_message(request, msg, level=level, remove_after_access=remove_after_access)
    return redirect_after_post(request, "/")


@router.get("/debug/error", tags=["infra"])
def debug_error() -> None:
    """Intentionally raise an error to exercise the 500 handler in non-prod."""
    settings = get_settings()
    if settings.env == "prod":
        raise HTTPException(404, "Not found")
    raise RuntimeError("Simulated failure for testing purposes")


@router.get("/demo/flash/keys", tags=["infra"])
def demo_flash_keys(store: FlashStore = Depends(flash_store)) -> dict[str, list[str]]:
    """List live flash keys without marking them as read."""
    return {"keys": store.keys()}
