"""Request-level access to flash messages."""

from __future__ import annotations

from typing import TypedDict

from fastapi import Request

from sessionflash.config import get_settings
from sessionflash.flash import FlashStore, SessionUnavailableError


class Message(TypedDict):
    level: str  # info|success|warning|danger
    text: str


def flash_store(request: Request) -> FlashStore:
    """FastAPI dependency: flash store bound to the request's session."""
    if "session" not in request.scope:
        raise SessionUnavailableError("SessionMiddleware must be installed to use flash messages")
    return FlashStore(request.session, meta_key=get_settings().flash_meta_key)


def add_message(
    request: Request, text: str, level: str = "info", remove_after_access: bool = True
) -> None:
    """Queue a message under its level, shown on the next rendered page."""
    flash_store(request).add(level, text, remove_after_access=remove_after_access)


def flash_messages(request: Request) -> list[Message]:
    """Return the live flashes of this request as leveled messages."""
    if "session" not in request.scope:
        return []
    messages: list[Message] = []
    for level, value in flash_store(request).get_all().items():
        for text in value if isinstance(value, list) else [value]:
            messages.append({"level": level, "text": str(text)})
    return messages
