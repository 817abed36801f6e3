"""Turn a grid snapshot into a named, typed export file."""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from pydantic import BaseModel

from ..snapshot.models import Grid
from .delimited import to_csv, to_tsv
from .formats import MIME_TYPES, ExportFormat
from .ods import to_ods_archive
from .xlsx import to_xlsx_archive

logger = logging.getLogger(__name__)

FILE_NAME_PREFIX = "beanfolio"
MAX_FILE_NAME_LENGTH = 80

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')
_WHITESPACE = re.compile(r"\s+")
_TRAILING_DOTS = re.compile(r"[.\s]+$")

_BUILDERS: dict[ExportFormat, Callable[[Grid], bytes]] = {
    ExportFormat.CSV: lambda cells: to_csv(cells).encode("utf-8"),
    ExportFormat.TSV: lambda cells: to_tsv(cells).encode("utf-8"),
    ExportFormat.XLSX: to_xlsx_archive,
    ExportFormat.ODS: to_ods_archive,
}


class ExportFile(BaseModel):
    """A ready-to-persist export."""

    file_name: str
    mime_type: str
    payload: bytes


def sanitize_file_name(label: str) -> str:
    """Reduce a label to a filesystem-safe base name (may be empty)."""
    name = _UNSAFE_CHARS.sub("-", label.strip())
    name = _WHITESPACE.sub(" ", name)
    name = _TRAILING_DOTS.sub("", name)
    return name[:MAX_FILE_NAME_LENGTH]


def fallback_base_name(now: Optional[datetime] = None) -> str:
    """Timestamped name used when a label sanitizes to nothing."""
    now = now or datetime.now(timezone.utc)
    return f"{FILE_NAME_PREFIX}-{now.strftime('%Y-%m-%dT%H-%M-%S')}"


def build_export_file(
    cells: Grid,
    export_format: ExportFormat,
    label: str = "",
    now: Optional[datetime] = None,
) -> ExportFile:
    """Serialize cells into the requested format.

    Trailing blank rows are expected to be trimmed by the caller.
    """
    try:
        export_format = ExportFormat(export_format)
    except ValueError:
        raise ValueError(f"Unsupported export format: {export_format}") from None

    base_name = sanitize_file_name(label) or fallback_base_name(now)
    payload = _BUILDERS[export_format](cells)

    logger.info(f"Exported {len(cells)} rows as {export_format.value} ({len(payload)} bytes)")
    return ExportFile(
        file_name=f"{base_name}.{export_format.value}",
        mime_type=MIME_TYPES[export_format],
        payload=payload,
    )


def write_export_file(export_file: ExportFile, directory: Path) -> Path:
    """Write an export file into a directory, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_file.file_name
    path.write_bytes(export_file.payload)
    logger.info(f"Wrote {path}")
    return path
