"""Opus identification and comment headers.

See: https://datatracker.ietf.org/doc/html/rfc7845#section-5
"""

import logging

from oggmeta.codecs.base import BaseHeaderDecoder, PacketCursor
from oggmeta.codecs.comment import read_comment_block
from oggmeta.container.demux import Packet
from oggmeta.errors import MalformedHeader, UnsupportedCodecVersion
from oggmeta.models import CodecType, Completeness, MetadataRecord, OpusInfo

logger = logging.getLogger(__name__)

IDENTIFICATION_SIGNATURE = b"OpusHead"
COMMENT_SIGNATURE = b"OpusTags"

# Granule positions always count 48 kHz samples
GRANULE_RATE = 48000


class OpusDecoder(BaseHeaderDecoder):
    """Decoder for the OpusHead and OpusTags packets."""

    codec = CodecType.OPUS
    signature = IDENTIFICATION_SIGNATURE
    header_count = 2
    completeness = Completeness.FULL

    def decode(self, index: int, packet: Packet, record: MetadataRecord) -> None:
        if index == 0:
            self.read_identification(packet, record)
        elif index == 1:
            self.read_comments(packet, record)

    def read_identification(self, packet: Packet, record: MetadataRecord) -> OpusInfo:
        """Read OpusHead into ``record.info``.

        A channel mapping table cut short is recorded as a MalformedHeader
        issue; the fixed fields before it are kept and the stream goes on to
        its comment header.
        """
        cursor = PacketCursor(packet, start=len(IDENTIFICATION_SIGNATURE))
        version = cursor.u8("opus version")
        # Upper nibble is the major version. Streams sharing our major
        # version are readable whatever their minor version.
        if version >> 4 != 0:
            raise UnsupportedCodecVersion(
                f"Unsupported Opus version {version >> 4}.{version & 0x0F}",
                packet.serial,
                packet.offset,
            )
        channels, pre_skip, input_sample_rate, output_gain, family = cursor.unpack(
            "BHIhB", "identification header"
        )

        info = OpusInfo(
            version=version,
            channels=channels,
            pre_skip=pre_skip,
            input_sample_rate=input_sample_rate,
            output_gain=output_gain,
            channel_mapping_family=family,
        )
        record.info = info
        if family != 0:
            try:
                info.stream_count = cursor.u8("stream count")
                info.coupled_count = cursor.u8("coupled stream count")
                info.channel_mapping = list(cursor.read(channels, "channel mapping"))
            except MalformedHeader as e:
                record.add_issue(e)
                logger.warning("Stream %08x: %s", packet.serial, e)
        return info

    def read_comments(self, packet: Packet, record: MetadataRecord) -> None:
        if not packet.data.startswith(COMMENT_SIGNATURE):
            raise MalformedHeader(
                "Second Opus packet is not an OpusTags header", packet.serial, packet.offset
            )
        cursor = PacketCursor(packet, start=len(COMMENT_SIGNATURE))
        # Anything after the comment list is padding or binary data; ignored.
        read_comment_block(cursor, record)

    def duration(self, record: MetadataRecord, granule_position: int) -> float | None:
        pre_skip = record.pre_skip or 0
        return max(granule_position - pre_skip, 0) / GRANULE_RATE
