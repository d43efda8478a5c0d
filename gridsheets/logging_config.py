"""
logging_config.py
------------------

Shared logging configuration and utilities for structured logging
throughout the gridsheets service.  It uses Python's built‑in
``logging`` module rather than ``print`` so that log output can be
captured by standard logging handlers or external collectors.
Messages are serialised as JSON to make them easier to parse
downstream.

Import ``logger`` and call its methods instead of ``logging.info``
directly.  The ``log_call`` decorator can be applied to service
functions to record entry and exit points at the DEBUG level without
leaking credentials such as passwords or tokens.
"""

from __future__ import annotations

import inspect
import json
import logging
import sys
from functools import wraps
from typing import Any, Callable, Dict

from pydantic import BaseModel

# Configure the root logger once.  Output goes to stdout; the message
# itself is a JSON string.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("gridsheets")

_SENSITIVE_KEYS = ("token", "password", "secret", "uri")


def _sanitize(obj: Any) -> Any:
    """Recursively sanitise objects for logging.

    Dictionaries lose any key containing one of ``_SENSITIVE_KEYS``
    (connection URIs may embed credentials).  Lists and tuples are processed element‑wise.  Pydantic
    models are converted through ``model_dump``.  Anything that is not
    JSON serialisable is replaced by its ``str``.
    """
    if isinstance(obj, (bytes, bytearray)):
        return f"<binary {len(obj)} bytes>"
    if isinstance(obj, dict):
        clean: Dict[str, Any] = {}
        for k, v in obj.items():
            if any(keyword in str(k).lower() for keyword in _SENSITIVE_KEYS):
                continue
            clean[k] = _sanitize(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [_sanitize(i) for i in obj]
    if isinstance(obj, BaseModel):
        return _sanitize(obj.model_dump())
    try:
        return json.loads(json.dumps(obj))
    except (TypeError, ValueError):
        return str(obj)


def log_call(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log entry and exit of functions.

    Logs a ``call_start`` DEBUG message before the function runs and a
    ``call_end`` message after it returns.  Arguments and the return
    value pass through ``_sanitize`` so credentials never reach the
    logs.  Exceptions propagate unchanged.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(json.dumps({
                "event": "call_start",
                "function": func.__name__,
                "args": _sanitize(args),
                "kwargs": _sanitize(kwargs),
            }, default=str))
        result = func(*args, **kwargs)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(json.dumps({
                "event": "call_end",
                "function": func.__name__,
                "result": _sanitize(result),
            }, default=str))
        return result

    # Keep the original signature visible to FastAPI and other
    # introspection tools.
    wrapper.__signature__ = inspect.signature(func)  # type: ignore[attr-defined]
    return wrapper
