"""Demultiplexing: split pages by logical stream and reassemble packets."""

import logging
from dataclasses import dataclass, field

from oggmeta.container.page import MAX_SEGMENT_SIZE, Page
from oggmeta.errors import (
    BrokenContinuation,
    OrphanContinuation,
    PageSequenceGap,
)

logger = logging.getLogger(__name__)


@dataclass
class Packet:
    """A reassembled packet of one logical stream."""

    serial: int
    data: bytes = field(repr=False)
    index: int
    offset: int
    granule_position: int

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class LogicalStream:
    """Reassembly state of one logical stream.

    Attributes:
        serial: Stream serial number
        first_page_offset: Byte offset of the stream's first page
        next_sequence: Page sequence number expected next
        page_count: Pages seen for this stream
        packet_count: Packets completed on those pages
        collecting: Packets are still being reassembled for this stream
        failed: A framing fault made the stream unusable
    """

    serial: int
    first_page_offset: int
    next_sequence: int | None = None
    page_count: int = 0
    packet_count: int = 0
    collecting: bool = True
    failed: bool = False
    _buffer: bytearray = field(default_factory=bytearray, repr=False)
    _buffer_offset: int | None = None

    @property
    def pending(self) -> bool:
        """True while a packet fragment is waiting for the next page."""
        return self._buffer_offset is not None

    @property
    def buffered(self) -> int:
        return len(self._buffer)

    def append(self, segment: bytes, offset: int) -> None:
        if self._buffer_offset is None:
            self._buffer_offset = offset
        self._buffer += segment

    def take(self) -> tuple[bytes, int]:
        """Return the buffered packet and its start offset, and clear the buffer."""
        data, offset = bytes(self._buffer), self._buffer_offset
        self.reset()
        return data, offset

    def reset(self) -> None:
        self._buffer = bytearray()
        self._buffer_offset = None


class Demultiplexer:
    """Route pages to per-stream accumulators and emit completed packets.

    Streams are kept in the order their first page was seen. A framing fault
    inside one stream marks that stream failed and raises a StreamLocalError;
    the demultiplexer itself stays usable for every other stream.
    """

    def __init__(self):
        self._streams: dict[int, LogicalStream] = {}

    @property
    def streams(self) -> list[LogicalStream]:
        return list(self._streams.values())

    def get(self, serial: int) -> LogicalStream | None:
        return self._streams.get(serial)

    def __contains__(self, serial: int) -> bool:
        return serial in self._streams

    def __len__(self) -> int:
        return len(self._streams)

    def push(self, page: Page) -> list[Packet]:
        """Feed one page and return the packets it completes.

        Args:
            page: Next page from the reader

        Returns:
            Completed packets of ``page.serial``, in order. Empty when the
            stream is no longer collecting or the page only carries a
            fragment.

        Raises:
            OrphanContinuation: Page continues a packet nothing was buffered for
            BrokenContinuation: A fragment was buffered but the page starts fresh
            PageSequenceGap: A page is missing from the stream
        """
        stream = self._streams.get(page.serial)
        if stream is None:
            stream = LogicalStream(serial=page.serial, first_page_offset=page.offset)
            self._streams[page.serial] = stream
            logger.debug("New logical stream %08x at byte %d", page.serial, page.offset)

        expected = stream.next_sequence
        stream.next_sequence = (page.sequence + 1) & 0xFFFFFFFF
        stream.page_count += 1

        if not stream.collecting or stream.failed:
            stream.packet_count += sum(1 for v in page.segment_table if v < MAX_SEGMENT_SIZE)
            return []

        if expected is not None and page.sequence != expected:
            self._fail(stream)
            raise PageSequenceGap(
                f"Expected page {expected}, got page {page.sequence}",
                page.serial,
                page.offset,
            )
        if page.continued and not stream.pending:
            self._fail(stream)
            raise OrphanContinuation(
                "Page continues a packet that was never started",
                page.serial,
                page.offset,
            )
        if stream.pending and not page.continued:
            self._fail(stream)
            raise BrokenContinuation(
                f"Page does not continue the {stream.buffered}-byte packet fragment before it",
                page.serial,
                page.offset,
            )

        packets = []
        for length, segment in page.segments():
            stream.append(segment, page.offset)
            if length < MAX_SEGMENT_SIZE:
                data, offset = stream.take()
                packets.append(
                    Packet(
                        serial=page.serial,
                        data=data,
                        index=stream.packet_count,
                        offset=offset,
                        granule_position=page.granule_position,
                    )
                )
                stream.packet_count += 1
        return packets

    def release(self, serial: int) -> None:
        """Stop reassembling packets for ``serial`` and drop its buffer."""
        stream = self._streams.get(serial)
        if stream is not None:
            stream.collecting = False
            stream.reset()

    def _fail(self, stream: LogicalStream) -> None:
        stream.failed = True
        stream.reset()
