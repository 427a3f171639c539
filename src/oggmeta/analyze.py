"""Core analysis functions.

The Aggregator pulls pages from a PageReader, feeds them through the
Demultiplexer and hands each stream's first packets to the matching header
decoder. It produces one MetadataRecord per logical stream, in the order the
streams' first pages appear.
"""

from __future__ import annotations

import io
import logging
import os
import warnings
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import BinaryIO

from oggmeta.codecs import BaseHeaderDecoder, detect_codec, get_decoder
from oggmeta.config import ScanConfig, get_config
from oggmeta.container import Demultiplexer, Packet, Page, PageReader
from oggmeta.errors import IncompleteHeaders, StreamLocalError, StructuralError
from oggmeta.models import (
    Completeness,
    ContainerMetadata,
    FileInfo,
    MetadataRecord,
    ScanError,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanProgress:
    """Snapshot of a running scan, passed to stop predicates.

    Attributes:
        pages_read: Pages read so far
        bytes_read: Bytes consumed from the source
        records: Records of the streams seen so far (not yet finalized)
        resolved: Every stream seen has had all its header packets read,
            or can no longer be decoded
        pages_since_new_stream: Pages read since the last new serial number
    """

    pages_read: int
    bytes_read: int
    records: list[MetadataRecord]
    resolved: bool
    pages_since_new_stream: int


StopPredicate = Callable[[ScanProgress], bool]


def headers_complete(idle_pages: int = 16) -> StopPredicate:
    """Stop once all headers are read and no stream has started recently.

    Args:
        idle_pages: Pages that must pass without a new serial number

    Returns:
        A predicate for ``Aggregator(stop_when=...)``
    """

    def predicate(progress: ScanProgress) -> bool:
        return progress.resolved and progress.pages_since_new_stream >= idle_pages

    return predicate


@dataclass
class _StreamState:
    record: MetadataRecord
    decoder: BaseHeaderDecoder | None = None
    classified: bool = False
    headers_read: int = 0
    resolved: bool = False

    @property
    def headers_needed(self) -> int:
        return self.decoder.header_count if self.decoder is not None else 1


class Aggregator:
    """Scan an Ogg container and collect per-stream metadata.

    Stream-local errors are recorded on the affected stream's record and the
    scan goes on. A StructuralError ends the scan; before it propagates, its
    ``records`` attribute is set to the records finalized so far.

    Args:
        source: Binary file object positioned at the first page
        config: Scan configuration (defaults to ``get_config().scan``)
        stop_when: Predicate checked after every page; the scan stops when
            it returns True. Defaults to ``headers_complete`` when
            ``config.stop_early`` is set, otherwise the scan runs to the end.
    """

    def __init__(
        self,
        source: BinaryIO,
        config: ScanConfig | None = None,
        stop_when: StopPredicate | None = None,
    ):
        self.config = config or get_config().scan
        if stop_when is None and self.config.stop_early:
            stop_when = headers_complete(self.config.idle_pages)
        self.stop_when = stop_when
        self.reader = PageReader(
            source,
            verify_crc=self.config.verify_crc,
            max_segments=self.config.max_segments,
        )
        self.demux = Demultiplexer()
        self.stopped_early = False
        self._states: dict[int, _StreamState] = {}
        self._pages_since_new_stream = 0
        self._reached_end = False
        self._records: list[MetadataRecord] | None = None

    @property
    def progress(self) -> ScanProgress:
        states = self._states.values()
        return ScanProgress(
            pages_read=self.reader.pages_read,
            bytes_read=self.reader.offset,
            records=[state.record for state in states],
            resolved=all(state.resolved for state in states),
            pages_since_new_stream=self._pages_since_new_stream,
        )

    def run(self) -> list[MetadataRecord]:
        """Scan the source and return one record per logical stream.

        Raises:
            StructuralError: The page framing is broken
        """
        if self._records is not None:
            return self._records
        try:
            for page in self.reader:
                self._process_page(page)
                if self.stop_when is not None and self.stop_when(self.progress):
                    self.stopped_early = True
                    logger.debug(
                        "Stopping early after %d pages (%d bytes)",
                        self.reader.pages_read,
                        self.reader.offset,
                    )
                    break
            else:
                self._reached_end = True
        except StructuralError as e:
            logger.warning("Scan aborted: %s", e)
            e.records = self._finalize()
            raise
        return self._finalize()

    def _process_page(self, page: Page) -> None:
        state = self._states.get(page.serial)
        if state is None:
            state = _StreamState(
                record=MetadataRecord(
                    serial=page.serial,
                    first_page_offset=page.offset,
                    beginning_of_stream=page.begins_stream,
                )
            )
            self._states[page.serial] = state
            self._pages_since_new_stream = 0
        else:
            self._pages_since_new_stream += 1

        record = state.record
        if page.has_granule_position:
            record.last_granule_position = page.granule_position
        if page.ends_stream:
            record.end_of_stream = True

        try:
            packets = self.demux.push(page)
        except StreamLocalError as e:
            self._degrade(state, e)
            return

        for packet in packets:
            if state.resolved:
                break
            try:
                self._process_packet(state, packet)
            except StreamLocalError as e:
                self._degrade(state, e)
                break

    def _process_packet(self, state: _StreamState, packet: Packet) -> None:
        record = state.record
        if not state.classified:
            state.classified = True
            record.codec = detect_codec(packet.data)
            state.decoder = get_decoder(record.codec)
            if state.decoder is None:
                logger.info("Stream %08x: unrecognized codec", packet.serial)
                self._resolve(state)
                return
            logger.debug("Stream %08x: %s", packet.serial, record.codec.value)

        state.decoder.decode(state.headers_read, packet, record)
        state.headers_read += 1
        if state.headers_read >= state.headers_needed:
            self._resolve(state)

    def _resolve(self, state: _StreamState) -> None:
        state.resolved = True
        self.demux.release(state.record.serial)

    def _degrade(self, state: _StreamState, error: StreamLocalError) -> None:
        logger.warning("Stream %08x degraded: %s", error.serial, error)
        state.record.add_issue(error)
        self._resolve(state)

    def _finalize(self) -> list[MetadataRecord]:
        if self._records is not None:
            return self._records

        records = []
        for state in self._states.values():
            record = state.record
            stream = self.demux.get(record.serial)
            if stream is not None:
                record.page_count = stream.page_count
                record.packet_count = stream.packet_count

            if not state.resolved:
                record.add_issue(
                    IncompleteHeaders(
                        f"Scan ended after {state.headers_read} of "
                        f"{state.headers_needed} header packets",
                        record.serial,
                        record.first_page_offset,
                    )
                )

            record.completeness = self._completeness(state)
            record.duration = self._duration(state)
            records.append(record)

        self._records = records
        return records

    def _completeness(self, state: _StreamState) -> Completeness:
        if state.record.issues:
            return Completeness.PARTIAL
        if state.decoder is None:
            return Completeness.NONE
        return state.decoder.completeness

    def _duration(self, state: _StreamState) -> float | None:
        record = state.record
        if state.decoder is None or record.info is None:
            return None
        if record.last_granule_position is None:
            return None
        # Only the last page of a stream gives its length
        if not (record.end_of_stream or self._reached_end):
            return None
        return state.decoder.duration(record, record.last_granule_position)


def scan(
    source: BinaryIO,
    config: ScanConfig | None = None,
    stop_when: StopPredicate | None = None,
) -> list[MetadataRecord]:
    """Scan a binary file object and return one record per logical stream."""
    return Aggregator(source, config=config, stop_when=stop_when).run()


def scan_bytes(
    data: bytes,
    config: ScanConfig | None = None,
    stop_when: StopPredicate | None = None,
) -> list[MetadataRecord]:
    """Scan an in-memory Ogg container."""
    return scan(io.BytesIO(data), config=config, stop_when=stop_when)


def get_file_info(path: str) -> FileInfo:
    """Get basic file information.

    Args:
        path: Path to the file

    Returns:
        FileInfo object with file details
    """
    stat = os.stat(path)

    # Get timestamps
    modified = datetime.fromtimestamp(stat.st_mtime)
    accessed = datetime.fromtimestamp(stat.st_atime)

    # st_birthtime is macOS-only
    created = None
    birthtime = getattr(stat, "st_birthtime", None)
    if birthtime:
        created = datetime.fromtimestamp(birthtime)

    return FileInfo(
        path=os.path.abspath(path),
        filename=os.path.basename(path),
        extension=os.path.splitext(path)[1].lower(),
        size_bytes=stat.st_size,
        created=created,
        modified=modified,
        accessed=accessed,
    )


def analyze_file(
    path: str,
    full: bool = False,
    strict: bool = False,
    config: ScanConfig | None = None,
) -> ContainerMetadata:
    """Analyze an Ogg file and extract the metadata of every logical stream.

    This is the main entry point for file analysis. It:
    1. Gets basic file information
    2. Scans the pages, stopping after the headers unless ``full`` is set
    3. Returns a ContainerMetadata object with one record per stream

    Args:
        path: Path to the Ogg file
        full: If True, read the whole file so stream durations are known
        strict: If True, raise structural errors instead of storing them
            in ``ContainerMetadata.error``
        config: Scan configuration (defaults to ``get_config().scan``)

    Returns:
        ContainerMetadata object with all extracted information

    Raises:
        FileNotFoundError: If the file does not exist
        StructuralError: If ``strict`` is set and the page framing is broken
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    scan_config = replace(config or get_config().scan, stop_early=not full)
    metadata = ContainerMetadata(file_info=get_file_info(path))

    with open(path, "rb") as f:
        aggregator = Aggregator(f, config=scan_config)
        try:
            metadata.streams = aggregator.run()
        except StructuralError as e:
            if strict:
                raise
            metadata.streams = e.records
            metadata.error = ScanError(kind=type(e).__name__, message=e.message, offset=e.offset)

    metadata.pages_read = aggregator.reader.pages_read
    metadata.bytes_read = aggregator.reader.offset
    metadata.stopped_early = aggregator.stopped_early
    return metadata


def analyze_files(paths: list[str], full: bool = False) -> list[ContainerMetadata]:
    """Analyze multiple Ogg files.

    Args:
        paths: List of file paths
        full: If True, read each file to the end

    Returns:
        List of ContainerMetadata objects
    """
    results = []
    for path in paths:
        try:
            metadata = analyze_file(path, full=full)
            results.append(metadata)
        except OSError as e:
            warnings.warn(f"Failed to analyze {path}: {e}", stacklevel=2)
    return results
