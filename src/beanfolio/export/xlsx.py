"""Single-sheet OOXML (.xlsx) workbook builder."""

import logging
from typing import Optional

from ..snapshot.a1 import cell_reference
from ..snapshot.models import CellSnapshot, Grid
from ..snapshot.resolver import format_number, resolve_cell
from .formats import ExportFormat, policy_for
from .xml import XML_DECLARATION_STANDALONE, escape_xml, should_preserve_space
from .zipwriter import ZipEntry, build_zip_archive

logger = logging.getLogger(__name__)

SPREADSHEETML_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
PACKAGE_RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
OFFICE_RELS_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"

SHEET_NAME = "Sheet1"


def build_content_types_xml() -> str:
    return "".join(
        [
            XML_DECLARATION_STANDALONE,
            f'<Types xmlns="{CONTENT_TYPES_NS}">',
            '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>',
            '<Default Extension="xml" ContentType="application/xml"/>',
            '<Override PartName="/xl/workbook.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>',
            '<Override PartName="/xl/worksheets/sheet1.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>',
            '<Override PartName="/xl/styles.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"/>',
            "</Types>",
        ]
    )


def build_root_relationships_xml() -> str:
    return "".join(
        [
            XML_DECLARATION_STANDALONE,
            f'<Relationships xmlns="{PACKAGE_RELS_NS}">',
            f'<Relationship Id="rId1" Type="{OFFICE_RELS_NS}/officeDocument" Target="xl/workbook.xml"/>',
            "</Relationships>",
        ]
    )


def build_workbook_xml() -> str:
    return "".join(
        [
            XML_DECLARATION_STANDALONE,
            f'<workbook xmlns="{SPREADSHEETML_NS}" xmlns:r="{OFFICE_RELS_NS}">',
            f'<sheets><sheet name="{SHEET_NAME}" sheetId="1" r:id="rId1"/></sheets>',
            "</workbook>",
        ]
    )


def build_workbook_relationships_xml() -> str:
    return "".join(
        [
            XML_DECLARATION_STANDALONE,
            f'<Relationships xmlns="{PACKAGE_RELS_NS}">',
            f'<Relationship Id="rId1" Type="{OFFICE_RELS_NS}/worksheet" Target="worksheets/sheet1.xml"/>',
            f'<Relationship Id="rId2" Type="{OFFICE_RELS_NS}/styles" Target="styles.xml"/>',
            "</Relationships>",
        ]
    )


def build_styles_xml() -> str:
    """Minimal style sheet: one font, the two mandatory fills, one border, one format."""
    return "".join(
        [
            XML_DECLARATION_STANDALONE,
            f'<styleSheet xmlns="{SPREADSHEETML_NS}">',
            '<fonts count="1"><font><sz val="11"/><name val="Calibri"/><family val="2"/></font></fonts>',
            '<fills count="2"><fill><patternFill patternType="none"/></fill><fill><patternFill patternType="gray125"/></fill></fills>',
            '<borders count="1"><border><left/><right/><top/><bottom/><diagonal/></border></borders>',
            '<cellStyleXfs count="1"><xf numFmtId="0" fontId="0" fillId="0" borderId="0"/></cellStyleXfs>',
            '<cellXfs count="1"><xf numFmtId="0" fontId="0" fillId="0" borderId="0" xfId="0"/></cellXfs>',
            '<cellStyles count="1"><cellStyle name="Normal" xfId="0" builtinId="0"/></cellStyles>',
            "</styleSheet>",
        ]
    )


def build_cell_xml(cell: CellSnapshot, row_index: int, col_index: int) -> Optional[str]:
    """Render one <c> element, or None when the cell has nothing to store."""
    resolved = resolve_cell(cell, policy_for(ExportFormat.XLSX))
    ref = cell_reference(row_index, col_index)

    if cell.formula:
        if resolved.formula is None:
            return None
        return f'<c r="{ref}"><f>{escape_xml(resolved.formula)}</f></c>'

    value = resolved.value
    if value is None:
        return None

    if isinstance(value, bool):
        return f'<c r="{ref}" t="b"><v>{1 if value else 0}</v></c>'

    if isinstance(value, (int, float)):
        return f'<c r="{ref}"><v>{format_number(value)}</v></c>'

    space = ' xml:space="preserve"' if should_preserve_space(value) else ""
    return f'<c r="{ref}" t="inlineStr"><is><t{space}>{escape_xml(value)}</t></is></c>'


def build_sheet_xml(cells: Grid) -> str:
    """Render the worksheet body; rows without any stored cell are left out."""
    parts = [XML_DECLARATION_STANDALONE, f'<worksheet xmlns="{SPREADSHEETML_NS}">', "<sheetData>"]

    for row_index, row in enumerate(cells):
        row_cells = []
        for col_index, cell in enumerate(row):
            cell_xml = build_cell_xml(cell, row_index, col_index)
            if cell_xml is not None:
                row_cells.append(cell_xml)

        if row_cells:
            parts.append(f'<row r="{row_index + 1}">')
            parts.extend(row_cells)
            parts.append("</row>")

    parts.append("</sheetData></worksheet>")
    return "".join(parts)


def build_xlsx_entries(cells: Grid) -> list[ZipEntry]:
    """All package parts, in archive order."""
    parts = [
        ("[Content_Types].xml", build_content_types_xml()),
        ("_rels/.rels", build_root_relationships_xml()),
        ("xl/workbook.xml", build_workbook_xml()),
        ("xl/_rels/workbook.xml.rels", build_workbook_relationships_xml()),
        ("xl/styles.xml", build_styles_xml()),
        ("xl/worksheets/sheet1.xml", build_sheet_xml(cells)),
    ]
    return [ZipEntry(name=name, data=xml.encode("utf-8")) for name, xml in parts]


def to_xlsx_archive(cells: Grid) -> bytes:
    """Build a complete .xlsx workbook from a grid."""
    archive = build_zip_archive(build_xlsx_entries(cells))
    logger.info(f"Built XLSX workbook for {len(cells)} rows ({len(archive)} bytes)")
    return archive
