"""Exception hierarchy for oggmeta.

Two families matter to callers:

- StructuralError: the page framing itself is broken. Page boundaries after
  the fault cannot be trusted, so the whole scan stops.
- StreamLocalError: something is wrong inside one logical stream. The stream
  is marked degraded and every other stream keeps being processed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oggmeta.models import MetadataRecord


class OggMetaError(Exception):
    """Base class for all oggmeta errors.

    Attributes:
        offset: Byte offset of the page or packet where the fault occurred
    """

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} (at byte {self.offset})"


class UnsupportedVersion(OggMetaError):
    """A version field holds a value this reader does not understand."""


# Structural errors


class StructuralError(OggMetaError):
    """Fatal framing error; ends the scan.

    Attributes:
        records: Records finalized for the streams seen before the fault.
            Filled in by the aggregator before the error reaches the caller.
    """

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message, offset)
        self.records: list[MetadataRecord] = []


class InvalidCapturePattern(StructuralError):
    """Page does not start with ``OggS``."""


class UnsupportedPageVersion(StructuralError, UnsupportedVersion):
    """Page header version is not 0."""


class SegmentTableOverflow(StructuralError):
    """Segment table is longer than allowed."""


class TruncatedInput(StructuralError):
    """Input ended inside a page header, segment table or payload."""


class ChecksumMismatch(StructuralError):
    """Page CRC does not match its contents."""


# Stream-local errors


class StreamLocalError(OggMetaError):
    """Error scoped to one logical stream.

    Attributes:
        serial: Serial number of the affected stream
    """

    def __init__(self, message: str, serial: int, offset: int | None = None):
        super().__init__(message, offset)
        self.serial = serial

    @property
    def kind(self) -> str:
        return type(self).__name__


class OrphanContinuation(StreamLocalError):
    """Page continues a packet, but nothing was buffered for it."""


class BrokenContinuation(StreamLocalError):
    """A packet fragment was buffered, but the next page starts a new packet."""


class PageSequenceGap(StreamLocalError):
    """Page sequence numbers skipped while header packets were pending."""


class MissingFramingBit(StreamLocalError):
    """Vorbis header framing bit is not set."""


class MalformedHeader(StreamLocalError):
    """Header packet is too short or has the wrong signature."""


class MalformedComment(StreamLocalError):
    """A comment entry is not ``KEY=VALUE`` UTF-8 text."""


class UnsupportedCodecVersion(StreamLocalError, UnsupportedVersion):
    """Codec header declares a version this reader cannot parse."""


class IncompleteHeaders(StreamLocalError):
    """Scan ended before the stream's header packets were all read."""
