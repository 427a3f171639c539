"""File information and file-level result models."""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import CodecType
from .record import MetadataRecord


def format_size(size_bytes: int | float) -> str:
    """Convert bytes to human-readable string."""
    if size_bytes < 0:
        return "N/A"
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB", "PB"]:
        if size < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} EB"


class FileInfo(BaseModel):
    """Basic file information."""

    path: str
    filename: str
    extension: str
    size_bytes: int
    created: datetime | None = None
    modified: datetime | None = None
    accessed: datetime | None = None

    @property
    def size_human(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size_bytes)


class ScanError(BaseModel):
    """Structural error that ended a scan early."""

    kind: str
    message: str
    offset: int | None = None


class ContainerMetadata(BaseModel):
    """Everything read from one Ogg file.

    ``streams`` holds one record per logical stream, in the order the
    streams' first pages appear. ``error`` is set when the page framing
    broke before the end of the file; the records then describe only what
    was read up to that point.
    """

    file_info: FileInfo
    streams: list[MetadataRecord] = Field(default_factory=list)
    pages_read: int = 0
    bytes_read: int = 0
    stopped_early: bool = False
    error: ScanError | None = None

    @property
    def path(self) -> str:
        """Return file path."""
        return self.file_info.path

    @property
    def filename(self) -> str:
        """Return filename."""
        return self.file_info.filename

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def codecs(self) -> list[CodecType]:
        return [record.codec for record in self.streams]

    def stream(self, serial: int) -> MetadataRecord | None:
        """Return the record for ``serial``, if that stream was seen."""
        for record in self.streams:
            if record.serial == serial:
                return record
        return None
