"""Default output formatter - per-stream report."""

from oggmeta.models import (
    ContainerMetadata,
    MetadataRecord,
    OpusInfo,
    SpeexInfo,
    TheoraInfo,
    VorbisInfo,
)


def _format_info(record: MetadataRecord) -> list[str]:
    info = record.info
    lines = []
    if isinstance(info, VorbisInfo):
        lines.append(f"  Channels:     {info.channels}")
        lines.append(f"  Sample rate:  {info.sample_rate} Hz")
        if info.bitrate_nominal > 0:
            lines.append(f"  Bitrate:      {info.bitrate_nominal // 1000} kbps (nominal)")
    elif isinstance(info, OpusInfo):
        lines.append(f"  Channels:     {info.channels}")
        lines.append(f"  Input rate:   {info.input_sample_rate} Hz")
        lines.append(f"  Pre-skip:     {info.pre_skip}")
        if info.output_gain:
            lines.append(f"  Output gain:  {info.output_gain_db:.2f} dB")
        lines.append(f"  Mapping:      family {info.channel_mapping_family}")
    elif isinstance(info, TheoraInfo):
        lines.append(f"  Version:      {info.version}")
        lines.append(f"  Picture:      {info.picture_width}x{info.picture_height}")
        lines.append(f"  Frame:        {info.frame_width}x{info.frame_height}")
        if info.frame_rate:
            lines.append(f"  Frame rate:   {info.frame_rate:.3f} fps")
        if info.aspect_numerator and info.aspect_denominator:
            lines.append(f"  Pixel aspect: {info.aspect_numerator}:{info.aspect_denominator}")
        lines.append(f"  Quality:      {info.quality}")
    elif isinstance(info, SpeexInfo):
        lines.append(f"  Version:      {info.version_string}")
        lines.append(f"  Channels:     {info.channels}")
        lines.append(f"  Sample rate:  {info.sample_rate} Hz")
        lines.append(f"  Mode:         {info.mode}")
        lines.append(f"  Frames/pkt:   {info.frames_per_packet}")
    return lines


def _format_stream(index: int, record: MetadataRecord) -> list[str]:
    lines = [""]
    lines.append(f"## STREAM {index} ({record.codec.value}, serial {record.serial:08x})")
    lines.append(f"  Status:       {record.completeness.value}")
    lines.extend(_format_info(record))
    if record.duration is not None:
        lines.append(f"  Duration:     {record.duration_formatted}")

    comments = record.comments
    if comments is not None:
        lines.append(f"  Vendor:       {comments.vendor}")
        for key, values in comments.tags.items():
            for value in values:
                lines.append(f"  {key}={value}")
        for entry in comments.undecodable:
            lines.append(f"  [undecodable comment {entry.index}: {len(entry.raw)} bytes]")

    for issue in record.issues:
        lines.append(f"  ! {issue}")
    return lines


def format_default(metadata: ContainerMetadata) -> str:
    """Format metadata as a readable per-stream report."""
    lines = []

    lines.append("=" * 70)
    lines.append(f"File: {metadata.filename}")
    lines.append("=" * 70)
    lines.append(f"  Size:         {metadata.file_info.size_human}")
    lines.append(f"  Streams:      {len(metadata.streams)}")
    lines.append(f"  Pages read:   {metadata.pages_read}")
    if metadata.stopped_early:
        lines.append("  (scan stopped after headers; use --full for durations)")

    for index, record in enumerate(metadata.streams):
        lines.extend(_format_stream(index, record))

    if metadata.error:
        lines.append("")
        lines.append("## ERROR")
        lines.append(f"  {metadata.error.kind}: {metadata.error.message}")
        if metadata.error.offset is not None:
            lines.append(f"  At byte:      {metadata.error.offset}")

    return "\n".join(lines)
