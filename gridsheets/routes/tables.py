"""
routes/tables.py
-----------------

API routes reading and writing the grid of the active sheet.  The
target sheet is the caller's current selection unless the request
names one explicitly with the ``collection`` query parameter.
"""

from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Depends, Query

from gridsheets.clients.mongo_client import DocumentStore, get_store
from gridsheets.core.config import Settings, get_app_settings
from gridsheets.core.context import ActiveSheetSelector, get_client_scope, get_selector
from gridsheets.logging_config import logger
from gridsheets.schemas.sheets import MessageResponse, SaveTableRequest, TablePayload
from gridsheets.services.table_service import get_table, save_table

router = APIRouter()


@router.get("/getTable", response_model=TablePayload)
def read_table(
    collection: Optional[str] = Query(None, description="Sheet to read instead of the active one."),
    scope: str = Depends(get_client_scope),
    selector: ActiveSheetSelector = Depends(get_selector),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    target = selector.resolve(scope, collection)
    return get_table(target, store, settings)


@router.post("/saveTable", response_model=MessageResponse)
def write_table(
    data: SaveTableRequest,
    collection: Optional[str] = Query(None, description="Sheet to write instead of the active one."),
    scope: str = Depends(get_client_scope),
    selector: ActiveSheetSelector = Depends(get_selector),
    store: DocumentStore = Depends(get_store),
):
    target = selector.resolve(scope, collection)
    logger.info(json.dumps({
        "event": "save_table_request",
        "scope": scope,
        "collection": target,
        "rows": data.rows,
        "columns": data.columns,
    }))
    return save_table(target, data, store)
