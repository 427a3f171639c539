"""Quiet output formatter - one-line summary."""

from oggmeta.models import ContainerMetadata, MetadataRecord


def _stream_summary(record: MetadataRecord) -> str:
    summary = record.codec.value
    if record.channels:
        summary += f" {record.channels}ch"
    if record.sample_rate:
        summary += f" {record.sample_rate}Hz"
    input_rate = record.input_sample_rate
    if input_rate and input_rate != record.sample_rate:
        summary += f" (input {input_rate}Hz)"
    if record.resolution:
        summary += f" {record.resolution}"
    if record.degraded:
        summary += " (partial)"
    return summary


def format_quiet(metadata: ContainerMetadata) -> str:
    """Format metadata as one-line summary.

    Format: filename | streams | title | error
    """
    parts = [metadata.filename]

    if metadata.streams:
        parts.append(", ".join(_stream_summary(r) for r in metadata.streams))
    else:
        parts.append("no streams")

    # First title found in any stream
    title = next(
        (r.comments.title for r in metadata.streams if r.comments and r.comments.title),
        None,
    )
    if title:
        parts.append(title)

    if metadata.error:
        parts.append(f"error: {metadata.error.kind}")

    return " | ".join(parts)


def format_quiet_list(metadata_list: list[ContainerMetadata]) -> str:
    """Format multiple metadata objects as one-line summaries.

    Args:
        metadata_list: List of ContainerMetadata objects

    Returns:
        Multiple lines, one per file
    """
    return "\n".join(format_quiet(m) for m in metadata_list)
