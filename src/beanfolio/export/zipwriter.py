"""Uncompressed ZIP archive writer.

Entries are written with the store method on a single disk: one local file
header plus data per entry, then the central directory and the
end-of-central-directory record. All entries share one DOS timestamp.
"""

import logging
import struct
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from .crc32 import crc32

logger = logging.getLogger(__name__)

LOCAL_FILE_HEADER_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

ZIP_VERSION = 20
STORE_METHOD = 0

MAX_ENTRIES = 0xFFFF
MAX_32BIT = 0xFFFFFFFF

# DOS epoch, 1980-01-01 00:00:00
DOS_EPOCH = datetime(1980, 1, 1)

# signature, version needed, flags, method, time, date, crc, compressed size,
# uncompressed size, name length, extra length
_LOCAL_HEADER = struct.Struct("<IHHHHHIIIHH")
# signature, version made by, version needed, flags, method, time, date, crc,
# compressed size, uncompressed size, name length, extra length, comment
# length, disk start, internal attrs, external attrs, local header offset
_CENTRAL_HEADER = struct.Struct("<IHHHHHHIIIHHHHHII")
# signature, disk number, central directory disk, entries on disk, total
# entries, central directory size, central directory offset, comment length
_END_RECORD = struct.Struct("<IHHHHIIH")


class ArchiveConstraintError(ValueError):
    """An archive would overflow the 16/32-bit fields of a plain ZIP."""


@dataclass(frozen=True)
class ZipEntry:
    """A named file inside an archive."""

    name: str  # Forward-slash separated archive path
    data: bytes


def dos_time(moment: datetime) -> int:
    return ((moment.hour & 0x1F) << 11) | ((moment.minute & 0x3F) << 5) | ((moment.second // 2) & 0x1F)


def dos_date(moment: datetime) -> int:
    year = max(moment.year, 1980)
    return (((year - 1980) & 0x7F) << 9) | ((moment.month & 0x0F) << 5) | (moment.day & 0x1F)


def _check_limits(entries: Sequence[ZipEntry]) -> None:
    if len(entries) > MAX_ENTRIES:
        raise ArchiveConstraintError(
            f"Archive has {len(entries)} entries; at most {MAX_ENTRIES} are supported"
        )

    total = 0
    for entry in entries:
        if len(entry.data) > MAX_32BIT:
            raise ArchiveConstraintError(f"Entry '{entry.name}' exceeds 4 GiB")
        total += _LOCAL_HEADER.size + len(entry.name.encode("utf-8")) + len(entry.data)

    if total > MAX_32BIT:
        raise ArchiveConstraintError("Archive exceeds 4 GiB of entry data")


def build_zip_archive(
    entries: Sequence[ZipEntry], timestamp: Optional[datetime] = None
) -> bytes:
    """Serialize entries into an uncompressed ZIP byte string."""
    _check_limits(entries)

    moment = timestamp or DOS_EPOCH
    time_field = dos_time(moment)
    date_field = dos_date(moment)

    chunks: list[bytes] = []
    central_records: list[bytes] = []
    offset = 0

    for entry in entries:
        name_bytes = entry.name.encode("utf-8")
        size = len(entry.data)
        checksum = crc32(entry.data)

        local_header = _LOCAL_HEADER.pack(
            LOCAL_FILE_HEADER_SIGNATURE,
            ZIP_VERSION,
            0,
            STORE_METHOD,
            time_field,
            date_field,
            checksum,
            size,
            size,
            len(name_bytes),
            0,
        )
        chunks.extend((local_header, name_bytes, entry.data))

        central_records.append(
            _CENTRAL_HEADER.pack(
                CENTRAL_DIRECTORY_SIGNATURE,
                ZIP_VERSION,
                ZIP_VERSION,
                0,
                STORE_METHOD,
                time_field,
                date_field,
                checksum,
                size,
                size,
                len(name_bytes),
                0,
                0,
                0,
                0,
                0,
                offset,
            )
            + name_bytes
        )

        offset += len(local_header) + len(name_bytes) + size

    central_directory = b"".join(central_records)
    end_record = _END_RECORD.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE,
        0,
        0,
        len(entries),
        len(entries),
        len(central_directory),
        offset,
        0,
    )

    logger.debug(
        f"Built ZIP archive with {len(entries)} entries "
        f"({offset + len(central_directory) + len(end_record)} bytes)"
    )
    return b"".join(chunks) + central_directory + end_record
