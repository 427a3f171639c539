"""JSON output formatter.

Raw comment bytes (``comments.undecodable[].raw``) are written as base64.
"""

import json
from typing import Any

from pydantic import TypeAdapter

from oggmeta.models import ContainerMetadata, MetadataRecord

_RECORDS = TypeAdapter(list[MetadataRecord])


def to_dict(metadata: ContainerMetadata) -> dict[str, Any]:
    """Convert file metadata to JSON-compatible dictionary."""
    return metadata.model_dump(mode="json")


def format_json(metadata: ContainerMetadata, indent: int = 2) -> str:
    """Format the metadata of one file as JSON."""
    return metadata.model_dump_json(indent=indent)


def format_json_list(metadata_list: list[ContainerMetadata], indent: int = 2) -> str:
    """Format several files as a JSON array, one object per file."""
    return json.dumps([to_dict(m) for m in metadata_list], indent=indent, ensure_ascii=False)


def format_records_json(records: list[MetadataRecord], indent: int = 2) -> str:
    """Format the records returned by ``scan`` or ``scan_bytes`` as a JSON array.

    Args:
        records: Per-stream records, in first-page order
        indent: JSON indentation level

    Returns:
        JSON array with one object per logical stream
    """
    return _RECORDS.dump_json(records, indent=indent).decode("utf-8")
