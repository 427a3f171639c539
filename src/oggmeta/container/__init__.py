"""Ogg container framing and demultiplexing."""

from .crc import ogg_crc32, page_checksum
from .demux import Demultiplexer, LogicalStream, Packet
from .page import (
    CAPTURE_PATTERN,
    MAX_SEGMENT_SIZE,
    MAX_SEGMENTS,
    NO_GRANULE_POSITION,
    PAGE_HEADER_FORMAT,
    PAGE_HEADER_SIZE,
    HeaderType,
    Page,
)
from .reader import PageReader

__all__ = [
    # Pages
    "Page",
    "HeaderType",
    "PageReader",
    "CAPTURE_PATTERN",
    "PAGE_HEADER_FORMAT",
    "PAGE_HEADER_SIZE",
    "MAX_SEGMENT_SIZE",
    "MAX_SEGMENTS",
    "NO_GRANULE_POSITION",
    # Packets
    "Demultiplexer",
    "LogicalStream",
    "Packet",
    # Checksum
    "ogg_crc32",
    "page_checksum",
]
