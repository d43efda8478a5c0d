"""
core/context.py
----------------

In‑memory active sheet selection.  Every ``getTable``/``saveTable``
call targets the sheet currently selected for the caller's scope.  The
scope is whatever the client sends in the ``X-Client-Id`` header;
clients that send nothing share :data:`DEFAULT_SCOPE`.

This state lives in process memory: it resets on restart and is not
shared across workers.  Selecting a name does not check that the sheet
exists.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from fastapi import Header, Request

DEFAULT_SCOPE = "default"


class ActiveSheetSelector:
    def __init__(self, default_collection: str) -> None:
        self.default_collection = default_collection
        self._active: Dict[str, str] = {}
        self._lock = threading.Lock()

    def set_active(self, name: str, scope: str = DEFAULT_SCOPE) -> str:
        """Point ``scope`` at ``name`` and return the new value."""
        with self._lock:
            self._active[scope] = name
        return name

    def get_active(self, scope: str = DEFAULT_SCOPE) -> str:
        with self._lock:
            return self._active.get(scope, self.default_collection)

    def resolve(self, scope: str = DEFAULT_SCOPE, override: Optional[str] = None) -> str:
        """Return ``override`` when given, otherwise the scope's active sheet."""
        if override:
            return override
        return self.get_active(scope)

    def clear(self, scope: Optional[str] = None) -> None:
        with self._lock:
            if scope is None:
                self._active.clear()
            else:
                self._active.pop(scope, None)


def get_selector(request: Request) -> ActiveSheetSelector:
    """Dependency returning the selector stored on the application state."""
    return request.app.state.selector


def get_client_scope(x_client_id: Optional[str] = Header(None)) -> str:
    """Dependency mapping the ``X-Client-Id`` header onto a selection scope."""
    if x_client_id and x_client_id.strip():
        return x_client_id.strip()
    return DEFAULT_SCOPE
