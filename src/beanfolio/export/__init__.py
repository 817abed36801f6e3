"""File exporters: delimited text and spreadsheet containers."""

from .crc32 import crc32
from .delimited import to_csv, to_delimited_text, to_tsv
from .files import ExportFile, build_export_file, sanitize_file_name, write_export_file
from .formats import ExportFormat, policy_for
from .ods import to_ods_archive
from .xlsx import to_xlsx_archive
from .zipwriter import ArchiveConstraintError, ZipEntry, build_zip_archive

__all__ = [
    "crc32",
    "to_csv",
    "to_delimited_text",
    "to_tsv",
    "ExportFile",
    "build_export_file",
    "sanitize_file_name",
    "write_export_file",
    "ExportFormat",
    "policy_for",
    "to_ods_archive",
    "to_xlsx_archive",
    "ArchiveConstraintError",
    "ZipEntry",
    "build_zip_archive",
]
