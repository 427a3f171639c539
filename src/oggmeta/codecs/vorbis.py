"""Vorbis identification and comment headers.

See: https://xiph.org/vorbis/doc/Vorbis_I_spec.html#x1-610004.2
"""

import logging

from oggmeta.codecs.base import BaseHeaderDecoder, PacketCursor
from oggmeta.codecs.comment import read_comment_block
from oggmeta.container.demux import Packet
from oggmeta.errors import MalformedHeader, MissingFramingBit, UnsupportedCodecVersion
from oggmeta.models import CodecType, Completeness, MetadataRecord, VorbisInfo

logger = logging.getLogger(__name__)

IDENTIFICATION_SIGNATURE = b"\x01vorbis"
COMMENT_SIGNATURE = b"\x03vorbis"


def _check_framing(cursor: PacketCursor, record: MetadataRecord, header: str) -> None:
    """Record MissingFramingBit unless the next byte has its low bit set."""
    if not cursor.remaining or not cursor.u8("framing bit") & 1:
        packet = cursor.packet
        record.add_issue(
            MissingFramingBit(
                f"{header} header framing bit not set", packet.serial, packet.offset
            )
        )
        logger.warning("Stream %08x: %s header framing bit not set", packet.serial, header)


class VorbisDecoder(BaseHeaderDecoder):
    """Decoder for the first two Vorbis header packets.

    The third Vorbis header (codec setup) carries no metadata and is not read.
    """

    codec = CodecType.VORBIS
    signature = IDENTIFICATION_SIGNATURE
    header_count = 2
    completeness = Completeness.FULL

    def decode(self, index: int, packet: Packet, record: MetadataRecord) -> None:
        if index == 0:
            record.info = self.read_identification(packet, record)
        elif index == 1:
            self.read_comments(packet, record)

    def read_identification(self, packet: Packet, record: MetadataRecord) -> VorbisInfo:
        cursor = PacketCursor(packet, start=len(IDENTIFICATION_SIGNATURE))
        version = cursor.u32("vorbis version")
        if version != 0:
            raise UnsupportedCodecVersion(
                f"Unsupported Vorbis version {version}", packet.serial, packet.offset
            )
        (
            channels,
            sample_rate,
            bitrate_maximum,
            bitrate_nominal,
            bitrate_minimum,
            blocksizes,
        ) = cursor.unpack("BIiiiB", "identification header")

        info = VorbisInfo(
            version=version,
            channels=channels,
            sample_rate=sample_rate,
            bitrate_maximum=bitrate_maximum,
            bitrate_nominal=bitrate_nominal,
            bitrate_minimum=bitrate_minimum,
            blocksize_0=1 << (blocksizes & 0x0F),
            blocksize_1=1 << (blocksizes >> 4),
        )
        _check_framing(cursor, record, "identification")
        return info

    def read_comments(self, packet: Packet, record: MetadataRecord) -> None:
        if not packet.data.startswith(COMMENT_SIGNATURE):
            raise MalformedHeader(
                "Second Vorbis packet is not a comment header", packet.serial, packet.offset
            )
        cursor = PacketCursor(packet, start=len(COMMENT_SIGNATURE))
        read_comment_block(cursor, record)
        _check_framing(cursor, record, "comment")

    def duration(self, record: MetadataRecord, granule_position: int) -> float | None:
        sample_rate = record.sample_rate
        if not sample_rate:
            return None
        return granule_position / sample_rate
