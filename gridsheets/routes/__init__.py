"""
Route aggregation package for the gridsheets API.

Each functional area (sheet management, grid data, authentication and
the protected index page) is its own module exposing an ``APIRouter``.
The application imports these routers and mounts them under the
configured base path.
"""

__all__ = [
    "auth",
    "protected",
    "sheets",
    "tables",
]

# Import submodules so their routers can be registered by main.py
from . import auth, protected, sheets, tables  # noqa: E402,F401
