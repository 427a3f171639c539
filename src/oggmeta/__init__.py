"""oggmeta - Ogg stream metadata reader.

Read the codec type and header metadata of every logical stream in an Ogg
container: Vorbis and Opus tags and audio parameters, Theora and Speex
identification headers.

Usage:
    from oggmeta import analyze_file

    metadata = analyze_file("song.ogg")
    for stream in metadata.streams:
        print(stream.codec, stream.completeness, stream.tags)

    # Scan an already open file object
    from oggmeta import scan

    with open("song.ogg", "rb") as f:
        records = scan(f)

    # Export as JSON
    print(metadata.model_dump_json())
"""

from oggmeta._version import __version__
from oggmeta.analyze import (
    Aggregator,
    ScanProgress,
    analyze_file,
    analyze_files,
    get_file_info,
    headers_complete,
    scan,
    scan_bytes,
)
from oggmeta.codecs import detect_codec, get_supported_codecs
from oggmeta.config import ScanConfig, get_config, load_config
from oggmeta.errors import (
    OggMetaError,
    StreamLocalError,
    StructuralError,
)
from oggmeta.formatters import (
    format_default,
    format_json,
    format_records_json,
    format_quiet,
    to_dict,
)
from oggmeta.models import (
    CodecType,
    CommentHeader,
    Completeness,
    ContainerMetadata,
    FileInfo,
    MetadataRecord,
    OpusInfo,
    SpeexInfo,
    StreamIssue,
    TheoraInfo,
    VorbisInfo,
)

__all__ = [
    # Version
    "__version__",
    # Main functions
    "analyze_file",
    "analyze_files",
    "get_file_info",
    "scan",
    "scan_bytes",
    "headers_complete",
    "detect_codec",
    "get_supported_codecs",
    "Aggregator",
    "ScanProgress",
    # Models
    "ContainerMetadata",
    "MetadataRecord",
    "StreamIssue",
    "CodecType",
    "Completeness",
    "CommentHeader",
    "VorbisInfo",
    "OpusInfo",
    "TheoraInfo",
    "SpeexInfo",
    "FileInfo",
    # Errors
    "OggMetaError",
    "StructuralError",
    "StreamLocalError",
    # Config
    "ScanConfig",
    "get_config",
    "load_config",
    # Formatters
    "format_default",
    "format_json",
    "format_records_json",
    "format_quiet",
    "to_dict",
]
