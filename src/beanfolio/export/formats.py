"""Export format selection."""

from enum import Enum

from ..snapshot.resolver import FormulaPolicy


class ExportFormat(str, Enum):
    """Supported file formats."""

    CSV = "csv"
    TSV = "tsv"
    XLSX = "xlsx"
    ODS = "ods"


MIME_TYPES = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.TSV: "text/tab-separated-values;charset=utf-8",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.ODS: "application/vnd.oasis.opendocument.spreadsheet",
}

FORMULA_POLICIES = {
    ExportFormat.CSV: FormulaPolicy.FORMULA_AS_TEXT,
    ExportFormat.TSV: FormulaPolicy.FORMULA_AS_TEXT,
    ExportFormat.XLSX: FormulaPolicy.LIVE_FORMULA,
    ExportFormat.ODS: FormulaPolicy.VALUE_WITH_NOTE,
}


def policy_for(export_format: ExportFormat) -> FormulaPolicy:
    """How formulas are represented in the given format."""
    return FORMULA_POLICIES[ExportFormat(export_format)]
