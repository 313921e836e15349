"""Application middlewares (sessions, flash request boundary)."""

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from sessionflash.config import get_settings
from sessionflash.flash import FLASH_META_KEY, FlashStore


class FlashSweepMiddleware:
    """Expire flash entries once at the start of every HTTP request.

    Must run inside ``SessionMiddleware`` so ``scope["session"]`` is populated.
    """

    def __init__(self, app: ASGIApp, meta_key: str = FLASH_META_KEY) -> None:
        self.app = app
        self.meta_key = meta_key

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and "session" in scope:
            FlashStore(scope["session"], meta_key=self.meta_key).sweep()
        await self.app(scope, receive, send)


def install_middlewares(app: FastAPI) -> None:
    """Install required middlewares."""
    settings = get_settings()
    # Last added is outermost: the session must wrap the sweep
    app.add_middleware(FlashSweepMiddleware, meta_key=settings.flash_meta_key)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
    )
