"""
routes/protected.py
--------------------

Routes that sit behind the auth gate.  They serve the spreadsheet front
end's index page once the caller is logged in.
"""

from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from gridsheets.core.auth import require_user
from gridsheets.core.config import Settings, get_app_settings

router = APIRouter()


def _index(settings: Settings, user: Dict[str, Any]):
    if os.path.isfile(settings.index_file):
        return FileResponse(settings.index_file)
    return {"message": f"Welcome, {user.get('username', 'user')}"}


@router.get("/index")
def index(user: Dict[str, Any] = Depends(require_user), settings: Settings = Depends(get_app_settings)):
    return _index(settings, user)


@router.get("/protected-route")
def protected_route(user: Dict[str, Any] = Depends(require_user), settings: Settings = Depends(get_app_settings)):
    return _index(settings, user)
