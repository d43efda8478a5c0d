"""
schemas/sheets.py
------------------

Pydantic models for sheet management and grid data.  Field names
follow the JSON bodies the spreadsheet front end already sends
(``sheetName``, ``collection``, ``rows``/``columns``/``data``), which
is why some of them are camelCase.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Cell(BaseModel):
    row: int = Field(ge=0)
    col: int = Field(ge=0)
    value: str = ""


class TableMetadata(BaseModel):
    rows: int = Field(ge=0)
    columns: int = Field(ge=0)


class TablePayload(BaseModel):
    """Response body of ``GET /getTable``."""
    metadata: TableMetadata
    data: List[Cell] = Field(default_factory=list)


class SaveTableRequest(BaseModel):
    """Full grid snapshot; it replaces whatever was stored before."""
    rows: int = Field(ge=0)
    columns: int = Field(ge=0)
    data: List[Cell] = Field(default_factory=list)


class SheetRequest(BaseModel):
    # Optional so that a missing name is reported as 400 by the service
    # rather than as a 422 body validation error.
    sheetName: Optional[str] = None


class CollectionRequest(BaseModel):
    collection: str


class SheetsResponse(BaseModel):
    sheets: List[str] = Field(default_factory=list)


class SheetResult(BaseModel):
    success: bool
    message: str


class MessageResponse(BaseModel):
    message: str
