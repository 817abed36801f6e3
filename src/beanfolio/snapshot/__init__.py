"""Grid snapshots and value resolution."""

from .models import CellSnapshot, Grid, GridCellValue, PresetType
from .grid import (
    build_snapshot,
    create_blank_grid,
    has_non_empty_cells,
    is_formula,
    normalize_display_value,
    trim_trailing_empty_rows,
)
from .resolver import FormulaPolicy, ResolvedCell, resolve_cell, resolve_value

__all__ = [
    "CellSnapshot",
    "Grid",
    "GridCellValue",
    "PresetType",
    "build_snapshot",
    "create_blank_grid",
    "has_non_empty_cells",
    "is_formula",
    "normalize_display_value",
    "trim_trailing_empty_rows",
    "FormulaPolicy",
    "ResolvedCell",
    "resolve_cell",
    "resolve_value",
]
