"""Ogg page representation.

See: https://datatracker.ietf.org/doc/html/rfc3533#section-6
"""

import enum
import struct
from dataclasses import dataclass, field

CAPTURE_PATTERN = b"OggS"

# capture pattern, version, header type, granule position, serial number,
# page sequence number, checksum, number of segments
PAGE_HEADER_FORMAT = "<4sBBQIIIB"
PAGE_HEADER_SIZE = struct.calcsize(PAGE_HEADER_FORMAT)

# Largest lacing value; a segment of this size does not end a packet
MAX_SEGMENT_SIZE = 255
MAX_SEGMENTS = 255

# Granule position of a page on which no packet ends
NO_GRANULE_POSITION = 0xFFFFFFFFFFFFFFFF


class HeaderType(enum.IntFlag):
    """Page header flags."""

    CONTINUED = 0x01
    BEGIN_OF_STREAM = 0x02
    END_OF_STREAM = 0x04


@dataclass
class Page:
    """One framed Ogg page."""

    header_type: HeaderType
    granule_position: int
    serial: int
    sequence: int
    checksum: int
    segment_table: tuple[int, ...]
    payload: bytes = field(repr=False)
    offset: int = 0
    version: int = 0
    capture_pattern: bytes = CAPTURE_PATTERN

    @property
    def continued(self) -> bool:
        return bool(self.header_type & HeaderType.CONTINUED)

    @property
    def begins_stream(self) -> bool:
        return bool(self.header_type & HeaderType.BEGIN_OF_STREAM)

    @property
    def ends_stream(self) -> bool:
        return bool(self.header_type & HeaderType.END_OF_STREAM)

    @property
    def has_granule_position(self) -> bool:
        return self.granule_position != NO_GRANULE_POSITION

    @property
    def size(self) -> int:
        """Total size of the page in bytes, header included."""
        return PAGE_HEADER_SIZE + len(self.segment_table) + len(self.payload)

    def segments(self):
        """Yield ``(lacing_value, segment_bytes)`` pairs in page order."""
        pos = 0
        for length in self.segment_table:
            yield length, self.payload[pos : pos + length]
            pos += length
