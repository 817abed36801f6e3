"""Preset grid layouts and default block labels."""

from datetime import datetime
from typing import Optional

from .a1 import index_to_col_letter
from .grid import GRID_COLUMNS, create_blank_grid
from .models import GridCellValue, PresetType

JOURNAL_TEMPLATE_HEADERS = ("#", "Account Name", "Debit", "Credit")
JOURNAL_COLUMN_WIDTHS = (32, 220, 84, 84, 74, 74, 76)
BLANK_COLUMN_WIDTH = 72

T_ACCOUNT_DEBIT_COL = 1
T_ACCOUNT_CREDIT_COL = 2

# Row indices are 0-based
T_ACCOUNT_BLOCKS = (
    {"title_row": 2, "top_row": 3, "entry_start_row": 4, "entry_end_row": 10, "total_row": 11, "title": "Account 1"},
    {"title_row": 13, "top_row": 14, "entry_start_row": 15, "entry_end_row": 21, "total_row": 22, "title": "Account 2"},
)

PRESET_LABEL_PREFIXES = {
    PresetType.BLANK: "Blank Sheet",
    PresetType.JOURNAL_ENTRY: "Journal Entry",
    PresetType.T_ACCOUNT: "T-Account",
}


def build_preset_grid(preset: PresetType) -> list[list[GridCellValue]]:
    """Build the raw source matrix for a preset."""
    grid = create_blank_grid()

    if preset == PresetType.JOURNAL_ENTRY:
        for col_index, header in enumerate(JOURNAL_TEMPLATE_HEADERS):
            grid[0][col_index] = header
        grid[1][0] = 1
        return grid

    if preset == PresetType.T_ACCOUNT:
        debit_col = index_to_col_letter(T_ACCOUNT_DEBIT_COL)
        credit_col = index_to_col_letter(T_ACCOUNT_CREDIT_COL)

        for block in T_ACCOUNT_BLOCKS:
            grid[block["title_row"]][T_ACCOUNT_DEBIT_COL] = block["title"]
            grid[block["top_row"]][T_ACCOUNT_DEBIT_COL] = "Dr"
            grid[block["top_row"]][T_ACCOUNT_CREDIT_COL] = "Cr"

            first, last = block["entry_start_row"] + 1, block["entry_end_row"] + 1
            debit_range = f"{debit_col}{first}:{debit_col}{last}"
            credit_range = f"{credit_col}{first}:{credit_col}{last}"
            net = f"SUM({debit_range})-SUM({credit_range})"
            has_entries = f"COUNTA({debit_range})+COUNTA({credit_range})>0"

            grid[block["total_row"]][T_ACCOUNT_DEBIT_COL] = (
                f'=IF({has_entries},IF({net}>=0,{net},""),"")'
            )
            grid[block["total_row"]][T_ACCOUNT_CREDIT_COL] = (
                f'=IF({has_entries},IF({net}<0,ABS({net}),""),"")'
            )

    return grid


def preset_column_headers(preset: PresetType) -> list[str]:
    """Column headers are A-series letters for every preset."""
    return [index_to_col_letter(i) for i in range(GRID_COLUMNS)]


def preset_column_widths(preset: PresetType) -> list[float]:
    """Column widths in pixels.

    Journal and T-account layouts share the same total width; the blank
    preset uses wider, equal columns.
    """
    if preset == PresetType.JOURNAL_ENTRY:
        return list(JOURNAL_COLUMN_WIDTHS)

    if preset == PresetType.BLANK:
        return [BLANK_COLUMN_WIDTH] * GRID_COLUMNS

    width = sum(JOURNAL_COLUMN_WIDTHS) / GRID_COLUMNS
    return [width] * GRID_COLUMNS


def preset_merge_cells(preset: PresetType) -> list[dict]:
    """Merged ranges: each T-account title spans its debit and credit columns."""
    if preset != PresetType.T_ACCOUNT:
        return []

    return [
        {"row": block["title_row"], "col": T_ACCOUNT_DEBIT_COL, "rowspan": 1, "colspan": 2}
        for block in T_ACCOUNT_BLOCKS
    ]


def format_short_local_datetime(now: Optional[datetime] = None) -> str:
    """Format like "Feb 18, 2026, 3:05 PM"."""
    now = now or datetime.now()
    hour = now.hour % 12 or 12
    return f"{now:%b} {now.day}, {now.year}, {hour}:{now:%M} {now:%p}"


def build_default_label(
    preset: PresetType = PresetType.BLANK, now: Optional[datetime] = None
) -> str:
    """Default block label for a preset, stamped with the local time."""
    prefix = PRESET_LABEL_PREFIXES.get(preset, "Ledger Entry")
    return f"{prefix} - {format_short_local_datetime(now)}"
