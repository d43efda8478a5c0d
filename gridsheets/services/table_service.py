"""
services/table_service.py
-------------------------

Business logic for grid storage.  Each sheet owns at most one table
document keyed by ``collectionName``.  Saves are total overwrites: the
stored rows, columns and cell list are replaced by the snapshot sent
by the client, so cells missing from a later save disappear.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from pymongo.errors import PyMongoError

from gridsheets.clients.mongo_client import DocumentStore
from gridsheets.core.config import Settings
from gridsheets.core.errors import StoreError
from gridsheets.logging_config import logger, log_call
from gridsheets.schemas.sheets import SaveTableRequest


def empty_table(settings: Settings) -> Dict[str, Any]:
    return {
        "metadata": {"rows": settings.default_rows, "columns": settings.default_columns},
        "data": [],
    }


@log_call
def get_table(collection: str, store: DocumentStore, settings: Settings) -> Dict[str, Any]:
    """Return the grid saved for ``collection``.

    A sheet that was never saved is not an error: the default empty
    grid (5 x 5, no cells unless configured otherwise) is returned.

    :raises StoreError: if the document store fails
    """
    try:
        table = store.tables.find_one({"collectionName": collection})
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "get_table_error",
            "collection": collection,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Error fetching table data")
    if not table:
        return empty_table(settings)
    return {
        "metadata": {"rows": table.get("rows", 0), "columns": table.get("columns", 0)},
        "data": [
            {"row": c["row"], "col": c["col"], "value": c.get("value", "")}
            for c in table.get("data", [])
        ],
    }


@log_call
def save_table(collection: str, payload: SaveTableRequest, store: DocumentStore) -> Dict[str, Any]:
    """Create or replace the grid for ``collection``.

    Cell coordinates are not checked against ``rows``/``columns``.

    :raises StoreError: if the document store fails
    """
    document = {
        "collectionName": collection,
        "rows": payload.rows,
        "columns": payload.columns,
        "data": [cell.model_dump() for cell in payload.data],
    }
    try:
        store.tables.replace_one({"collectionName": collection}, document, upsert=True)
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "save_table_error",
            "collection": collection,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Error saving table data")
    logger.info(json.dumps({
        "event": "save_table_success",
        "collection": collection,
        "rows": payload.rows,
        "columns": payload.columns,
        "cells": len(payload.data),
    }))
    return {"message": "Table data saved successfully"}
