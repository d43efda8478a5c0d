"""
services/sheet_service.py
-------------------------

Business logic for the sheet registry: the single metadata document
listing every known sheet name in insertion order.

Registry mutations are single atomic ``$addToSet``/``$pull`` updates,
so concurrent writers, in this process or another, can neither drop
nor duplicate a name.  Deleting a sheet also removes its grid
from the table collection.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from gridsheets.clients.mongo_client import DocumentStore
from gridsheets.core.errors import NotFoundError, StoreError, ValidationError
from gridsheets.logging_config import logger, log_call

REGISTRY_ID = "sheet-registry"


def _require_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Sheet name required!")
    return name


@log_call
def add_sheet(name: Optional[str], store: DocumentStore) -> Dict[str, Any]:
    """Register a new sheet name.

    A name that is already registered is not an error: the response
    carries ``success=False`` and the registry is left unchanged.

    :raises ValidationError: if the name is missing or blank
    :raises StoreError: if the document store fails
    """
    name = _require_name(name)
    try:
        # $addToSet checks and appends in one server-side step, so writers
        # in other processes cannot slip a duplicate in between.
        result = store.metadata.update_one(
            {"_id": REGISTRY_ID},
            {"$addToSet": {"sheetNames": name}},
            upsert=True,
        )
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "add_sheet_error",
            "sheet": name,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Error adding sheet")
    if result.modified_count == 0 and result.upserted_id is None:
        logger.info(json.dumps({"event": "add_sheet_exists", "sheet": name}))
        return {"success": False, "message": "Sheet already exists!"}
    logger.info(json.dumps({"event": "add_sheet_success", "sheet": name}))
    return {"success": True, "message": "Sheet added successfully"}


@log_call
def get_sheets(store: DocumentStore) -> List[str]:
    """Return registered sheet names, or an empty list before the first addition."""
    try:
        registry = store.metadata.find_one({"_id": REGISTRY_ID})
    except PyMongoError as e:
        logger.error(json.dumps({"event": "get_sheets_error", "detail": str(e)}), exc_info=True)
        raise StoreError("Error fetching sheets")
    if not registry:
        return []
    return list(registry.get("sheetNames", []))


@log_call
def delete_sheet(name: Optional[str], store: DocumentStore) -> Dict[str, Any]:
    """Remove a sheet from the registry and drop its grid.

    The sheet counts as found when it was present in the registry or
    had a saved grid; if neither held it a 404 is raised.

    :raises ValidationError: if the name is missing or blank
    :raises NotFoundError: if the sheet is unknown to both collections
    :raises StoreError: if the document store fails
    """
    name = _require_name(name)
    try:
        pulled = store.metadata.update_one(
            {"_id": REGISTRY_ID, "sheetNames": name},
            {"$pull": {"sheetNames": name}},
        ).modified_count
        deleted = store.tables.delete_one({"collectionName": name}).deleted_count
    except PyMongoError as e:
        logger.error(json.dumps({
            "event": "delete_sheet_error",
            "sheet": name,
            "detail": str(e),
        }), exc_info=True)
        raise StoreError("Internal Server Error")
    if not pulled and not deleted:
        logger.warning(json.dumps({"event": "delete_sheet_not_found", "sheet": name}))
        raise NotFoundError("Sheet not found!")
    logger.info(json.dumps({
        "event": "delete_sheet_success",
        "sheet": name,
        "registry_entry": bool(pulled),
        "table": bool(deleted),
    }))
    return {"success": True, "message": f'Sheet "{name}" deleted.'}
