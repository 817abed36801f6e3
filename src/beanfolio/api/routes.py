"""API routes for Beanfolio."""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Header, HTTPException, Response
from pydantic import BaseModel, Field

from ..export import ExportFormat, build_export_file
from ..ledger import GoogleLedgerClient, LedgerApiError, LedgerTarget, SaveRequest
from ..snapshot import CellSnapshot, PresetType, trim_trailing_empty_rows
from ..snapshot.presets import (
    build_default_label,
    build_preset_grid,
    preset_column_headers,
    preset_column_widths,
    preset_merge_cells,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ledger_client(access_token: str) -> GoogleLedgerClient:
    """Create a ledger client for one request."""
    return GoogleLedgerClient(access_token)


class ExportRequest(BaseModel):
    """Request to export a grid snapshot as a file."""

    label: str = ""
    cells: list[list[CellSnapshot]] = Field(default_factory=list)


class SaveResponse(BaseModel):
    """Result of appending a block to the ledger."""

    status: str
    ledger: LedgerTarget
    rows_saved: int


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Sign in first to save into Google Sheets.")
    token = authorization[len("bearer "):].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Sign in first to save into Google Sheets.")
    return token


# Export endpoints


@router.post("/export/{export_format}")
async def export_grid(export_format: ExportFormat, request: ExportRequest):
    """Export a grid snapshot as CSV, TSV, XLSX or ODS."""
    cells = trim_trailing_empty_rows(request.cells)

    try:
        export_file = build_export_file(cells, export_format, request.label)
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=export_file.payload,
        media_type=export_file.mime_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(export_file.file_name)}"
        },
    )


# Ledger endpoints


@router.post("/ledger/save", response_model=SaveResponse)
async def save_to_ledger(request: SaveRequest, authorization: Optional[str] = Header(default=None)):
    """Append a labelled block to the ledger spreadsheet's archive sheet."""
    token = _bearer_token(authorization)
    cells = trim_trailing_empty_rows(request.cells)
    save_request = SaveRequest(label=request.label, cells=cells, column_count=request.column_count)

    client = get_ledger_client(token)
    try:
        ledger = await client.find_or_create_ledger()
        await client.append_ledger_block(ledger, save_request)
    except LedgerApiError as e:
        raise HTTPException(status_code=502, detail=e.message)
    finally:
        await client.close()

    return SaveResponse(status="ok", ledger=ledger, rows_saved=len(cells))


# Preset endpoints


@router.get("/presets/{preset}")
async def get_preset(preset: PresetType):
    """Starting grid, layout hints and default label for a preset."""
    return {
        "preset": preset.value,
        "label": build_default_label(preset),
        "cells": build_preset_grid(preset),
        "column_headers": preset_column_headers(preset),
        "column_widths": preset_column_widths(preset),
        "merge_cells": preset_merge_cells(preset),
    }


@router.get("/health")
async def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    # Gather non-secret diagnostics
    config = {
        "ledger_file_name": settings.ledger_file_name,
        "archive_sheet_name": settings.archive_sheet_name,
        "google_credentials_configured": settings.google_credentials_path.exists(),
        "export_formats": [fmt.value for fmt in ExportFormat],
    }

    return {
        "status": "ok",
        "service": "beanfolio",
        "config": config,
    }
