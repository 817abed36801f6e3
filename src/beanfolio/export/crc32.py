"""Table-driven CRC-32 (IEEE 802.3, reflected polynomial 0xEDB88320)."""

from functools import lru_cache

CRC32_POLYNOMIAL = 0xEDB88320


@lru_cache(maxsize=1)
def crc32_table() -> tuple[int, ...]:
    """Build the 256-entry lookup table once."""
    table = []
    for index in range(256):
        value = index
        for _ in range(8):
            if value & 1:
                value = CRC32_POLYNOMIAL ^ (value >> 1)
            else:
                value >>= 1
        table.append(value)
    return tuple(table)


def crc32(data: bytes, value: int = 0) -> int:
    """Compute the CRC-32 of ``data``.

    Pass the checksum of a previous chunk as ``value`` to continue it, so
    ``crc32(b, crc32(a)) == crc32(a + b)``.
    """
    table = crc32_table()
    checksum = value ^ 0xFFFFFFFF

    for byte in data:
        checksum = (checksum >> 8) ^ table[(checksum ^ byte) & 0xFF]

    return checksum ^ 0xFFFFFFFF
