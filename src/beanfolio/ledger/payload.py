"""Build the row structure for a Google Sheets ``appendCells`` request.

Each appended block looks like::

    <gap rows>          BLANK_GAP_ROWS fully blank rows
    <label row>         only when the label is non-blank; label in column A
    <data rows>         one row per snapshot row, cells mapped 1:1

Every row has ``max(1, column_count)`` cells in the gap and label rows. A
data cell carries ``userEnteredValue`` for its display value and, on its own,
a ``note`` with the formula text when the cell holds a formula.
"""

from typing import Optional

from ..snapshot.models import CellSnapshot, Grid, GridCellValue
from ..snapshot.resolver import FormulaPolicy, resolve_cell, resolve_value

BLANK_GAP_ROWS = 4
APPEND_FIELDS = "userEnteredValue,note"


def build_blank_row(column_count: int) -> dict:
    return {"values": [{} for _ in range(column_count)]}


def to_user_entered_value(value: GridCellValue) -> Optional[dict]:
    """Map a display value to an ExtendedValue, or None when it is blank."""
    resolved = resolve_value(value)
    if resolved is None:
        return None

    if isinstance(resolved, bool):
        return {"boolValue": resolved}

    if isinstance(resolved, (int, float)):
        return {"numberValue": resolved}

    return {"stringValue": resolved}


def to_cell_data(cell: CellSnapshot) -> dict:
    """Map a snapshot cell to a CellData object."""
    resolved = resolve_cell(cell, FormulaPolicy.VALUE_WITH_NOTE)
    data: dict = {}

    user_entered_value = to_user_entered_value(resolved.value)
    if user_entered_value:
        data["userEnteredValue"] = user_entered_value

    if resolved.note:
        data["note"] = resolved.note

    return data


def build_append_rows(label: str, cells: Grid, column_count: int) -> list[dict]:
    """Assemble gap rows, the optional label row and the data block."""
    width = max(1, column_count)
    rows = [build_blank_row(width) for _ in range(BLANK_GAP_ROWS)]

    trimmed_label = (label or "").strip()
    if trimmed_label:
        label_row = build_blank_row(width)
        label_row["values"][0] = {"userEnteredValue": {"stringValue": trimmed_label}}
        rows.append(label_row)

    for row in cells:
        rows.append({"values": [to_cell_data(cell) for cell in row]})

    return rows


def build_append_request(sheet_id: int, rows: list[dict]) -> dict:
    """Wrap rows in a batchUpdate body."""
    return {
        "requests": [
            {
                "appendCells": {
                    "sheetId": sheet_id,
                    "rows": rows,
                    "fields": APPEND_FIELDS,
                }
            }
        ]
    }
