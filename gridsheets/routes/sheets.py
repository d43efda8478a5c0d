"""
routes/sheets.py
-----------------

API routes for sheet management and active sheet selection.  None of
these routes require authentication.  They delegate to
:mod:`gridsheets.services.sheet_service`; the selection itself is kept
by the :class:`~gridsheets.core.context.ActiveSheetSelector` on the
application state.
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Depends

from gridsheets.clients.mongo_client import DocumentStore, get_store
from gridsheets.core.context import ActiveSheetSelector, get_client_scope, get_selector
from gridsheets.logging_config import logger
from gridsheets.schemas.sheets import (
    CollectionRequest,
    MessageResponse,
    SheetRequest,
    SheetResult,
    SheetsResponse,
)
from gridsheets.services.sheet_service import add_sheet, delete_sheet, get_sheets

router = APIRouter()


@router.post("/setCollection", response_model=MessageResponse)
def post_set_collection(
    data: CollectionRequest,
    scope: str = Depends(get_client_scope),
    selector: ActiveSheetSelector = Depends(get_selector),
):
    """Select the sheet that ``getTable``/``saveTable`` operate on for this caller."""
    active = selector.set_active(data.collection, scope)
    logger.info(json.dumps({"event": "set_collection", "scope": scope, "collection": active}))
    return {"message": f"Active collection set to {active}"}


@router.post("/addSheet", response_model=SheetResult)
def post_add_sheet(data: SheetRequest, store: DocumentStore = Depends(get_store)):
    logger.info(json.dumps({"event": "add_sheet_request", "sheet": data.sheetName}))
    return add_sheet(data.sheetName, store)


@router.get("/getSheets", response_model=SheetsResponse)
def list_sheets(store: DocumentStore = Depends(get_store)):
    return {"sheets": get_sheets(store)}


@router.delete("/deleteSheet", response_model=SheetResult)
def remove_sheet(data: SheetRequest, store: DocumentStore = Depends(get_store)):
    logger.info(json.dumps({"event": "delete_sheet_request", "sheet": data.sheetName}))
    return delete_sheet(data.sheetName, store)
