"""Ogg page checksum.

CRC-32 with generator polynomial 0x04C11DB7, zero initial value, no bit
reflection and no final xor (RFC 3533 section 6). The checksum is computed
over the whole page with the checksum field set to zero.
"""

CRC_POLYNOMIAL = 0x04C11DB7

# Offset and size of the checksum field inside the page header
CRC_OFFSET = 22
CRC_SIZE = 4


def _make_table() -> list[int]:
    table = []
    for i in range(256):
        crc = i << 24
        for _ in range(8):
            if crc & 0x80000000:
                crc = ((crc << 1) ^ CRC_POLYNOMIAL) & 0xFFFFFFFF
            else:
                crc = (crc << 1) & 0xFFFFFFFF
        table.append(crc)
    return table


_CRC_TABLE = _make_table()


def ogg_crc32(data: bytes, crc: int = 0) -> int:
    """Compute the Ogg CRC of ``data``, optionally continuing from ``crc``."""
    for byte in data:
        crc = ((crc << 8) & 0xFFFFFFFF) ^ _CRC_TABLE[((crc >> 24) ^ byte) & 0xFF]
    return crc


def page_checksum(header: bytes, segment_table: bytes, payload: bytes) -> int:
    """Compute the checksum of a page given its raw parts.

    Args:
        header: The 27-byte page header as read (checksum field included)
        segment_table: Raw lacing values
        payload: Page payload

    Returns:
        The CRC the page header should carry
    """
    zeroed = header[:CRC_OFFSET] + b"\x00" * CRC_SIZE + header[CRC_OFFSET + CRC_SIZE :]
    crc = ogg_crc32(zeroed)
    crc = ogg_crc32(segment_table, crc)
    return ogg_crc32(payload, crc)
