"""Single-sheet OpenDocument (.ods) spreadsheet builder."""

import logging

from ..snapshot.models import CellSnapshot, Grid
from ..snapshot.resolver import format_number, resolve_cell
from .formats import ExportFormat, policy_for
from .xml import XML_DECLARATION, escape_xml
from .zipwriter import ZipEntry, build_zip_archive

logger = logging.getLogger(__name__)

ODS_MIMETYPE = "application/vnd.oasis.opendocument.spreadsheet"
ODF_VERSION = "1.2"

OFFICE_NS = "urn:oasis:names:tc:opendocument:xmlns:office:1.0"
TABLE_NS = "urn:oasis:names:tc:opendocument:xmlns:table:1.0"
TEXT_NS = "urn:oasis:names:tc:opendocument:xmlns:text:1.0"
MANIFEST_NS = "urn:oasis:names:tc:opendocument:xmlns:manifest:1.0"

SHEET_NAME = "Sheet1"
XML_PARTS = ("content.xml", "styles.xml", "meta.xml", "settings.xml")

EMPTY_CELL = "<table:table-cell/>"


def build_cell_xml(cell: CellSnapshot) -> str:
    """Render one <table:table-cell>; every cell is emitted, blank or not."""
    resolved = resolve_cell(cell, policy_for(ExportFormat.ODS))
    value = resolved.value

    annotation = ""
    if resolved.note:
        annotation = f"<office:annotation><text:p>{escape_xml(resolved.note)}</text:p></office:annotation>"

    if value is None:
        if not annotation:
            return EMPTY_CELL
        return f"<table:table-cell>{annotation}</table:table-cell>"

    if isinstance(value, bool):
        return (
            f'<table:table-cell office:value-type="boolean" office:boolean-value="{"true" if value else "false"}">'
            f"{annotation}<text:p>{'TRUE' if value else 'FALSE'}</text:p></table:table-cell>"
        )

    if isinstance(value, (int, float)):
        number = format_number(value)
        return (
            f'<table:table-cell office:value-type="float" office:value="{number}">'
            f"{annotation}<text:p>{escape_xml(number)}</text:p></table:table-cell>"
        )

    return (
        '<table:table-cell office:value-type="string">'
        f"{annotation}<text:p>{escape_xml(value)}</text:p></table:table-cell>"
    )


def build_content_xml(cells: Grid) -> str:
    parts = [
        XML_DECLARATION,
        f'<office:document-content xmlns:office="{OFFICE_NS}" xmlns:table="{TABLE_NS}"'
        f' xmlns:text="{TEXT_NS}" office:version="{ODF_VERSION}">',
        f'<office:body><office:spreadsheet><table:table table:name="{SHEET_NAME}">',
    ]

    for row in cells:
        parts.append("<table:table-row>")
        parts.extend(build_cell_xml(cell) for cell in row)
        parts.append("</table:table-row>")

    parts.append("</table:table></office:spreadsheet></office:body></office:document-content>")
    return "".join(parts)


def _empty_document(root: str, child: str) -> str:
    return (
        f'{XML_DECLARATION}<office:{root} xmlns:office="{OFFICE_NS}" office:version="{ODF_VERSION}">'
        f"<office:{child}/></office:{root}>"
    )


def build_styles_xml() -> str:
    return _empty_document("document-styles", "styles")


def build_meta_xml() -> str:
    return _empty_document("document-meta", "meta")


def build_settings_xml() -> str:
    return _empty_document("document-settings", "settings")


def build_manifest_xml() -> str:
    parts = [
        XML_DECLARATION,
        f'<manifest:manifest xmlns:manifest="{MANIFEST_NS}" manifest:version="{ODF_VERSION}">',
        f'<manifest:file-entry manifest:media-type="{ODS_MIMETYPE}" manifest:full-path="/"/>',
    ]
    parts.extend(
        f'<manifest:file-entry manifest:media-type="text/xml" manifest:full-path="{name}"/>'
        for name in XML_PARTS
    )
    parts.append("</manifest:manifest>")
    return "".join(parts)


def build_ods_entries(cells: Grid) -> list[ZipEntry]:
    """All document parts; ``mimetype`` must come first."""
    parts = [
        ("mimetype", ODS_MIMETYPE),
        ("content.xml", build_content_xml(cells)),
        ("styles.xml", build_styles_xml()),
        ("meta.xml", build_meta_xml()),
        ("settings.xml", build_settings_xml()),
        ("META-INF/manifest.xml", build_manifest_xml()),
    ]
    return [ZipEntry(name=name, data=text.encode("utf-8")) for name, text in parts]


def to_ods_archive(cells: Grid) -> bytes:
    """Build a complete .ods spreadsheet from a grid."""
    archive = build_zip_archive(build_ods_entries(cells))
    logger.info(f"Built ODS spreadsheet for {len(cells)} rows ({len(archive)} bytes)")
    return archive
