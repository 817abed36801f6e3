"""Resolve captured cells into canonical values for each export target.

Every exporter looks at a cell through one of three formula policies:

* ``FORMULA_AS_TEXT`` - delimited text. The raw formula text replaces the
  display value, so ``=A1*2`` is written as a literal field.
* ``LIVE_FORMULA`` - OOXML. The formula (minus its leading ``=``) is kept as
  a live formula and no cached value is written.
* ``VALUE_WITH_NOTE`` - ODF and the ledger append. The last computed display
  value is written and the formula rides along as a ``Formula: ...`` note.

Values that cannot be represented (non-finite numbers, blank strings) resolve
to ``None`` and are omitted by every target rather than raised.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .models import CellSnapshot

CanonicalValue = Union[bool, int, float, str, None]

FORMULA_NOTE_PREFIX = "Formula: "


class FormulaPolicy(str, Enum):
    """How a formula-bearing cell is represented in a target format."""

    FORMULA_AS_TEXT = "formula_as_text"
    LIVE_FORMULA = "live_formula"
    VALUE_WITH_NOTE = "value_with_note"


@dataclass(frozen=True)
class ResolvedCell:
    """A cell after resolution for a specific policy."""

    value: CanonicalValue = None
    formula: Optional[str] = None  # Live formula body, LIVE_FORMULA only
    note: Optional[str] = None  # Formula annotation, VALUE_WITH_NOTE only

    @property
    def is_empty(self) -> bool:
        return self.value is None and self.formula is None and self.note is None


def resolve_value(raw: Any) -> CanonicalValue:
    """Normalize a raw value into a number, boolean, string or None."""
    if raw is None:
        return None

    if isinstance(raw, bool):
        return raw

    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        return raw

    text = raw if isinstance(raw, str) else str(raw)
    if not text.strip():
        return None
    return text


def live_formula(formula: Optional[str]) -> Optional[str]:
    """Return the formula body with a single leading '=' stripped."""
    if not formula:
        return None

    body = formula.strip()
    if body.startswith("="):
        body = body[1:]
    return body or None


def formula_note(formula: Optional[str]) -> Optional[str]:
    """Return the annotation text that carries a formula alongside its value."""
    if not formula:
        return None
    return f"{FORMULA_NOTE_PREFIX}{formula}"


def resolve_cell(cell: CellSnapshot, policy: FormulaPolicy) -> ResolvedCell:
    """Resolve a cell for the given formula policy."""
    if policy == FormulaPolicy.FORMULA_AS_TEXT:
        if cell.formula:
            return ResolvedCell(value=cell.formula)
        return ResolvedCell(value=resolve_value(cell.display_value))

    if policy == FormulaPolicy.LIVE_FORMULA:
        if cell.formula:
            # A formula cell never falls back to its cached value
            return ResolvedCell(formula=live_formula(cell.formula))
        return ResolvedCell(value=resolve_value(cell.display_value))

    return ResolvedCell(
        value=resolve_value(cell.display_value),
        note=formula_note(cell.formula),
    )


def format_number(value: Union[int, float]) -> str:
    """Render a finite number as a plain, round-tripping decimal literal.

    Integral floats drop their ``.0`` so ``5.0`` and ``5`` both print as
    ``5``; there is never any locale grouping.
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
