"""Session-backed flash data that lives for one request cycle.

Flash values are stored directly in the session under their own key, so they
share a namespace with ordinary session variables. Lifecycle bookkeeping is
kept under a single reserved key:

    session["__flash"] = {
        "request": <request id>,
        "entries": {key: {"state": ..., "created": ..., "accessed": ...,
                          "remove_after_access": ...}},
    }

States:
    -1  remove-after-access entry that has not been read yet
     0  keep entry created during the current request
     1  expiring, removed by the next ``sweep()``
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

FLASH_META_KEY = "__flash"

Scalar = str | int | float | bool | None
Value = Scalar | list[Scalar]

_UNTIL_ACCESSED = -1
_FRESH = 0
_EXPIRING = 1


class FlashError(RuntimeError):
    """Base error for flash handling."""


class SessionUnavailableError(FlashError):
    """No session is attached to the current request."""


@dataclass(frozen=True)
class FlashEntry:
    """Read-only view of a single flash entry."""

    key: str
    value: Value
    created_at_request_id: int
    accessed_since_creation: bool
    remove_after_access: bool


class FlashStore:
    """One-shot key/value messages on top of a session mapping."""

    def __init__(self, session: MutableMapping[str, Any], meta_key: str = FLASH_META_KEY) -> None:
        self._session = session
        self._meta_key = meta_key

    # -- bookkeeping -------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        meta = self._session.get(self._meta_key)
        if not isinstance(meta, dict):
            return {"request": 0, "entries": {}}
        meta.setdefault("request", 0)
        meta.setdefault("entries", {})
        return meta

    def _save(self, meta: dict[str, Any]) -> None:
        # Reassign so mappings that track writes see the change
        if meta["entries"]:
            self._session[self._meta_key] = meta
        else:
            self._session.pop(self._meta_key, None)

    def _check_key(self, key: str) -> None:
        if key == self._meta_key:
            raise FlashError(f"{key!r} is reserved for flash bookkeeping")

    def _track(self, meta: dict[str, Any], key: str, remove_after_access: bool) -> None:
        meta["entries"][key] = {
            "state": _UNTIL_ACCESSED if remove_after_access else _FRESH,
            "created": meta["request"],
            "accessed": False,
            "remove_after_access": bool(remove_after_access),
        }

    @staticmethod
    def _mark_accessed(entry: dict[str, Any]) -> None:
        entry["accessed"] = True
        if entry["state"] == _UNTIL_ACCESSED:
            entry["state"] = _EXPIRING

    # -- public API --------------------------------------------------------

    @property
    def request_id(self) -> int:
        """Number of request boundaries seen since flash data appeared."""
        return int(self._load()["request"])

    def get(self, key: str, default: Any = None, delete: bool = False) -> Any:
        """
        Return the flash value for ``key`` or ``default``.

        With ``delete=True`` the entry is removed right away. Otherwise the read
        is recorded; a remove-after-access entry stays visible for the rest of
        this request and is dropped at the next boundary.
        """
        meta = self._load()
        entry = meta["entries"].get(key)
        if entry is None:
            return default
        value = self._session.get(key, default)
        if delete:
            self.remove(key)
            return value
        self._mark_accessed(entry)
        self._save(meta)
        return value

    def get_all(self, delete: bool = False) -> dict[str, Value]:
        """Return every live flash entry, keyed by flash key."""
        meta = self._load()
        entries = meta["entries"]
        result: dict[str, Value] = {}
        for key in list(entries):
            if key not in self._session:
                # Value was dropped through the plain session interface
                del entries[key]
                continue
            result[key] = self._session[key]
            if delete:
                del self._session[key]
                del entries[key]
            else:
                self._mark_accessed(entries[key])
        self._save(meta)
        return result

    def set(self, key: str, value: Value = True, remove_after_access: bool = True) -> None:
        """Create or overwrite the flash entry for ``key``."""
        self._check_key(key)
        meta = self._load()
        self._track(meta, key, remove_after_access)
        self._session[key] = value
        self._save(meta)
        logger.debug("flash set %s (remove_after_access=%s)", key, remove_after_access)

    def add(self, key: str, value: Scalar = True, remove_after_access: bool = True) -> None:
        """Append ``value`` to the flash list stored under ``key``."""
        self._check_key(key)
        meta = self._load()
        if key in meta["entries"] and key in self._session:
            current = self._session[key]
            stored = [*current, value] if isinstance(current, list) else [current, value]
        else:
            stored = [value]
        self._track(meta, key, remove_after_access)
        self._session[key] = stored
        self._save(meta)
        logger.debug("flash add %s (%d queued)", key, len(stored))

    def remove(self, key: str) -> Any:
        """Delete the entry and return its value, or None if there was none."""
        meta = self._load()
        value = None
        if key in meta["entries"] and key in self._session:
            value = self._session[key]
        # Same namespace as plain session variables
        self._session.pop(key, None)
        meta["entries"].pop(key, None)
        self._save(meta)
        return value

    def remove_all(self) -> None:
        """Delete every flash entry, leaving other session variables alone."""
        meta = self._load()
        for key in meta["entries"]:
            self._session.pop(key, None)
        self._session.pop(self._meta_key, None)

    def has(self, key: str) -> bool:
        """Whether a flash entry exists for ``key``. Not counted as a read."""
        return key in self._load()["entries"] and key in self._session

    def entry(self, key: str) -> FlashEntry | None:
        """Return a snapshot of the entry for ``key`` without touching it."""
        meta = self._load()
        entry = meta["entries"].get(key)
        if entry is None or key not in self._session:
            return None
        return FlashEntry(
            key=key,
            value=self._session[key],
            created_at_request_id=int(entry["created"]),
            accessed_since_creation=bool(entry["accessed"]),
            remove_after_access=bool(entry["remove_after_access"]),
        )

    def keys(self) -> list[str]:
        return [key for key in self._load()["entries"] if key in self._session]

    def sweep(self) -> None:
        """
        Apply a request boundary.

        Called once per request by the hosting pipeline before any handler runs.
        """
        if self._meta_key not in self._session:
            return
        meta = self._load()
        meta["request"] += 1
        expired = []
        for key, entry in list(meta["entries"].items()):
            if entry["state"] == _EXPIRING:
                self._session.pop(key, None)
                del meta["entries"][key]
                expired.append(key)
            elif entry["state"] == _FRESH:
                entry["state"] = _EXPIRING
        self._save(meta)
        if expired:
            logger.debug("flash sweep expired %s", ", ".join(expired))

    advance_request_boundary = sweep

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())
