"""Data models for grid snapshots."""

import math
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bool comes first so pydantic keeps True/False instead of coercing to int
GridCellValue = Union[bool, int, float, str, None]


class PresetType(str, Enum):
    """Starting layouts for a fresh grid."""

    BLANK = "blank"
    JOURNAL_ENTRY = "journal_entry"
    T_ACCOUNT = "t_account"


class CellSnapshot(BaseModel):
    """One grid cell as captured at export time."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    display_value: GridCellValue = Field(default=None, alias="displayValue")
    formula: Optional[str] = None  # Raw formula text, e.g. "=SUM(A1:A3)"

    @field_validator("display_value", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """Whitespace-only strings and non-finite numbers carry no value."""
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    @property
    def has_formula(self) -> bool:
        return bool(self.formula)

    @property
    def is_blank(self) -> bool:
        """True when the cell has neither a display value nor a formula."""
        return self.display_value is None and not self.formula


Grid = list[list[CellSnapshot]]
