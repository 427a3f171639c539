"""Per-stream metadata record."""

from pydantic import BaseModel, Field

from .codecs import CommentHeader, OpusInfo, StreamInfo, TheoraInfo
from .enums import CodecType, Completeness


class StreamIssue(BaseModel):
    """A stream-local problem found while reading one logical stream."""

    kind: str
    message: str
    offset: int | None = None

    def __str__(self) -> str:
        if self.offset is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind}: {self.message} (at byte {self.offset})"


class MetadataRecord(BaseModel):
    """Metadata of one logical stream.

    Fields:
    - serial: stream serial number
    - codec / info: codec family and its identification header fields
    - comments: vendor string and tags (Vorbis and Opus only)
    - completeness / issues: how much was read, and what went wrong if not all
    - remaining fields: container bookkeeping gathered from the pages
    """

    serial: int
    codec: CodecType = CodecType.UNKNOWN
    completeness: Completeness = Completeness.PARTIAL
    info: StreamInfo | None = None
    comments: CommentHeader | None = None
    issues: list[StreamIssue] = Field(default_factory=list)

    first_page_offset: int = 0
    page_count: int = 0
    packet_count: int = 0
    beginning_of_stream: bool = False
    end_of_stream: bool = False
    last_granule_position: int | None = None
    duration: float | None = None

    def add_issue(self, error: Exception) -> StreamIssue:
        """Record a stream-local error against this stream."""
        issue = StreamIssue(
            kind=type(error).__name__,
            message=getattr(error, "message", str(error)),
            offset=getattr(error, "offset", None),
        )
        self.issues.append(issue)
        return issue

    @property
    def degraded(self) -> bool:
        return bool(self.issues)

    @property
    def channels(self) -> int | None:
        return getattr(self.info, "channels", None)

    @property
    def sample_rate(self) -> int | None:
        """Return the decoding sample rate.

        Opus always decodes at 48 kHz, so this is 48000 for every Opus
        stream; the rate of the original input is ``input_sample_rate``.
        """
        return getattr(self.info, "sample_rate", None)

    @property
    def input_sample_rate(self) -> int | None:
        """Return the Opus header's original input rate, when it sets one."""
        if isinstance(self.info, OpusInfo) and self.info.input_sample_rate:
            return self.info.input_sample_rate
        return None

    @property
    def vendor(self) -> str | None:
        return self.comments.vendor if self.comments else None

    @property
    def tags(self) -> dict[str, list[str]]:
        return self.comments.tags if self.comments else {}

    @property
    def duration_formatted(self) -> str:
        """Return duration as human-readable string."""
        if self.duration is None:
            return "N/A"
        duration = self.duration
        if duration < 60:
            return f"{duration:.1f}s"
        minutes = int(duration // 60)
        seconds = duration % 60
        if minutes < 60:
            return f"{minutes}m {seconds:.1f}s"
        hours = minutes // 60
        minutes = minutes % 60
        return f"{hours}h {minutes}m {seconds:.0f}s"

    @property
    def resolution(self) -> str | None:
        if isinstance(self.info, TheoraInfo):
            return f"{self.info.picture_width}x{self.info.picture_height}"
        return None

    @property
    def pre_skip(self) -> int | None:
        if isinstance(self.info, OpusInfo):
            return self.info.pre_skip
        return None
