"""Page framing: turn a byte source into a sequence of Ogg pages."""

import logging
import struct
from typing import BinaryIO

from oggmeta.container.crc import page_checksum
from oggmeta.container.page import (
    CAPTURE_PATTERN,
    MAX_SEGMENTS,
    PAGE_HEADER_FORMAT,
    PAGE_HEADER_SIZE,
    HeaderType,
    Page,
)
from oggmeta.errors import (
    ChecksumMismatch,
    InvalidCapturePattern,
    SegmentTableOverflow,
    StructuralError,
    TruncatedInput,
    UnsupportedPageVersion,
)

logger = logging.getLogger(__name__)


class PageReader:
    """Pull pages one at a time from a forward-only binary source.

    The reader is single pass. Once the input is exhausted, or once a
    structural error has been raised, ``next_page()`` keeps returning None:
    after a framing fault the position of the next page is unknown.

    Args:
        source: Object with a ``read(n)`` method, positioned at the first page
        verify_crc: Check each page's CRC and raise ChecksumMismatch on error
        max_segments: Upper bound on segment table entries
    """

    def __init__(
        self,
        source: BinaryIO,
        verify_crc: bool = False,
        max_segments: int = MAX_SEGMENTS,
    ):
        self._source = source
        self.verify_crc = verify_crc
        self.max_segments = max_segments
        self.offset = 0
        self.pages_read = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def __iter__(self) -> "PageReader":
        return self

    def __next__(self) -> Page:
        page = self.next_page()
        if page is None:
            raise StopIteration
        return page

    def next_page(self) -> Page | None:
        """Read the next page.

        Returns:
            The page, or None at end of input (on a page boundary)

        Raises:
            StructuralError: The input is not a well-formed page sequence
        """
        if self._finished:
            return None
        try:
            page = self._read_page()
        except StructuralError:
            self._finished = True
            raise
        if page is None:
            self._finished = True
            logger.debug("End of input after %d pages (%d bytes)", self.pages_read, self.offset)
            return None
        self.pages_read += 1
        return page

    def _read_page(self) -> Page | None:
        start = self.offset

        header = self._read(PAGE_HEADER_SIZE)
        if not header:
            return None
        if len(header) < PAGE_HEADER_SIZE:
            raise TruncatedInput(
                f"Page header truncated: got {len(header)} of {PAGE_HEADER_SIZE} bytes",
                start,
            )

        (
            capture_pattern,
            version,
            header_type,
            granule_position,
            serial,
            sequence,
            checksum,
            segment_count,
        ) = struct.unpack(PAGE_HEADER_FORMAT, header)

        if capture_pattern != CAPTURE_PATTERN:
            raise InvalidCapturePattern(
                f"Expected capture pattern {CAPTURE_PATTERN!r}, found {capture_pattern!r}",
                start,
            )
        if version != 0:
            raise UnsupportedPageVersion(f"Unsupported page version {version}", start)
        if segment_count > self.max_segments:
            raise SegmentTableOverflow(
                f"Segment table has {segment_count} entries, limit is {self.max_segments}",
                start,
            )

        segment_table = self._read(segment_count)
        if len(segment_table) < segment_count:
            raise TruncatedInput(
                f"Segment table truncated: got {len(segment_table)} of {segment_count} entries",
                start,
            )

        payload_size = sum(segment_table)
        payload = self._read(payload_size)
        if len(payload) < payload_size:
            raise TruncatedInput(
                f"Page payload truncated: got {len(payload)} of {payload_size} bytes",
                start,
            )

        if self.verify_crc:
            expected = page_checksum(header, segment_table, payload)
            if expected != checksum:
                raise ChecksumMismatch(
                    f"Page checksum {checksum:08x} does not match computed {expected:08x}",
                    start,
                )

        return Page(
            header_type=HeaderType(header_type),
            granule_position=granule_position,
            serial=serial,
            sequence=sequence,
            checksum=checksum,
            segment_table=tuple(segment_table),
            payload=payload,
            offset=start,
            version=version,
            capture_pattern=capture_pattern,
        )

    def _read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, looping over short reads."""
        if size == 0:
            return b""
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._source.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        self.offset += len(data)
        return data
