"""CSV and TSV serialization."""

from ..snapshot.models import Grid
from ..snapshot.resolver import CanonicalValue, format_number, resolve_cell
from .formats import ExportFormat, policy_for

UTF8_BOM = "\ufeff"
ROW_SEPARATOR = "\r\n"

DELIMITER_FORMATS = {",": ExportFormat.CSV, "\t": ExportFormat.TSV}


def encode_delimited_cell(value: CanonicalValue, delimiter: str) -> str:
    """Encode a single resolved value as a delimited field."""
    if value is None:
        return ""

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return format_number(value)

    needs_quoting = (
        '"' in value
        or "\n" in value
        or "\r" in value
        or delimiter in value
        or value.strip() != value
    )
    if not needs_quoting:
        return value

    return '"' + value.replace('"', '""') + '"'


def to_delimited_text(grid: Grid, delimiter: str) -> str:
    """Serialize a grid with the given field delimiter.

    Formula cells are written as their formula text. Rows are CRLF-joined
    and the result carries a UTF-8 byte-order mark.
    """
    policy = policy_for(DELIMITER_FORMATS.get(delimiter, ExportFormat.CSV))
    lines = []
    for row in grid:
        fields = [
            encode_delimited_cell(resolve_cell(cell, policy).value, delimiter)
            for cell in row
        ]
        lines.append(delimiter.join(fields))

    return UTF8_BOM + ROW_SEPARATOR.join(lines)


def to_csv(grid: Grid) -> str:
    return to_delimited_text(grid, ",")


def to_tsv(grid: Grid) -> str:
    return to_delimited_text(grid, "\t")
