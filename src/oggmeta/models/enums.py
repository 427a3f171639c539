"""Enumerations shared by the oggmeta models."""

from enum import Enum


class CodecType(str, Enum):
    """Codec family of a logical stream."""

    VORBIS = "vorbis"
    OPUS = "opus"
    THEORA = "theora"
    SPEEX = "speex"
    UNKNOWN = "unknown"


class Completeness(str, Enum):
    """How much of a stream's metadata could be obtained.

    - FULL: identification and comment headers parsed cleanly (Vorbis, Opus)
    - PARTIAL: the stream was degraded; see ``MetadataRecord.issues``
    - DETECTION_ONLY: codec identified and its header fields exposed
      (Theora, Speex)
    - NONE: unrecognized codec, nothing decoded
    """

    FULL = "full"
    PARTIAL = "partial"
    DETECTION_ONLY = "detection_only"
    NONE = "none"
