"""Grid capture and shape utilities."""

import logging
from typing import Any, Optional, Sequence

from ..config import settings
from .models import CellSnapshot, Grid, GridCellValue

logger = logging.getLogger(__name__)

GRID_ROWS = settings.grid_rows
GRID_COLUMNS = settings.grid_columns


def create_blank_grid(
    rows: int = GRID_ROWS, columns: int = GRID_COLUMNS
) -> list[list[GridCellValue]]:
    """Create a rows x columns matrix of None values."""
    return [[None for _ in range(columns)] for _ in range(rows)]


def _is_blank(value: GridCellValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def has_non_empty_cells(matrix: Sequence[Sequence[GridCellValue]]) -> bool:
    """Check whether any cell in a raw value matrix holds content."""
    return any(not _is_blank(value) for row in matrix for value in row)


def normalize_display_value(value: Any) -> GridCellValue:
    """Normalize a raw display value; blank strings become None.

    Non-blank strings are kept exactly as typed, surrounding whitespace
    included. Anything that is not a primitive is stringified.
    """
    if value is None:
        return None

    if isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return None if not value.strip() else value

    return str(value)


def is_formula(raw_value: Any) -> bool:
    """Check whether a raw source value is formula text."""
    return isinstance(raw_value, str) and raw_value.strip().startswith("=")


def build_snapshot(
    source: Sequence[Sequence[Any]],
    display: Optional[Sequence[Sequence[Any]]] = None,
    column_count: Optional[int] = None,
) -> Grid:
    """Capture a grid snapshot from source and computed display matrices.

    ``source`` holds what was typed into each cell (formulas included) and
    ``display`` holds what the formula engine computed for it. Without a
    display matrix, formula cells are captured with no display value.
    Rows are padded or cut to ``column_count`` columns.
    """
    width = column_count if column_count is not None else max((len(r) for r in source), default=0)
    grid: Grid = []

    for row_index, source_row in enumerate(source):
        display_row = display[row_index] if display is not None and row_index < len(display) else None
        row: list[CellSnapshot] = []

        for col_index in range(width):
            raw = source_row[col_index] if col_index < len(source_row) else None
            if display_row is not None and col_index < len(display_row):
                shown = display_row[col_index]
            else:
                shown = None if is_formula(raw) else raw

            row.append(
                CellSnapshot(
                    display_value=normalize_display_value(shown),
                    formula=raw if is_formula(raw) else None,
                )
            )
        grid.append(row)

    logger.debug(f"Captured snapshot of {len(grid)}x{width} cells")
    return grid


def trim_trailing_empty_rows(cells: Grid) -> Grid:
    """Drop trailing rows in which every cell is blank."""
    for row_index in range(len(cells) - 1, -1, -1):
        if any(not cell.is_blank for cell in cells[row_index]):
            return cells[: row_index + 1]
    return []
