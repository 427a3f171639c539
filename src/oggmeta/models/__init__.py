"""Pydantic models for oggmeta."""

from .codecs import (
    CommentHeader,
    OpusInfo,
    SpeexInfo,
    StreamInfo,
    TheoraInfo,
    UndecodableComment,
    VorbisInfo,
)
from .enums import CodecType, Completeness
from .file import ContainerMetadata, FileInfo, ScanError, format_size
from .record import MetadataRecord, StreamIssue

__all__ = [
    # Main models
    "ContainerMetadata",
    "MetadataRecord",
    "StreamIssue",
    "ScanError",
    # Enums
    "CodecType",
    "Completeness",
    # Codec headers
    "StreamInfo",
    "VorbisInfo",
    "OpusInfo",
    "TheoraInfo",
    "SpeexInfo",
    "CommentHeader",
    "UndecodableComment",
    # File
    "FileInfo",
    "format_size",
]
