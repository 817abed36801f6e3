"""Data models for the Google Sheets ledger."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..snapshot.models import CellSnapshot


class LedgerTarget(BaseModel):
    """The spreadsheet and archive sheet that blocks are appended to."""

    model_config = ConfigDict(populate_by_name=True)

    spreadsheet_id: str = Field(alias="spreadsheetId")
    spreadsheet_title: str = Field(alias="spreadsheetTitle")
    sheet_id: int = Field(alias="sheetId")
    sheet_title: str = Field(alias="sheetTitle")


class SaveRequest(BaseModel):
    """A labelled block of cells to append to the ledger."""

    model_config = ConfigDict(populate_by_name=True)

    label: str = ""
    cells: list[list[CellSnapshot]] = Field(default_factory=list)
    column_count: int = Field(alias="columnCount")


class LedgerApiError(Exception):
    """A Google API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
