"""Theora identification header.

All fields are big-endian. See: https://www.theora.org/doc/Theora.pdf
section 6.2.
"""

from oggmeta.codecs.base import BaseHeaderDecoder, PacketCursor
from oggmeta.container.demux import Packet
from oggmeta.errors import UnsupportedCodecVersion
from oggmeta.models import CodecType, Completeness, MetadataRecord, TheoraInfo

IDENTIFICATION_SIGNATURE = b"\x80theora"

SUPPORTED_MAJOR_VERSION = 3


class TheoraDecoder(BaseHeaderDecoder):
    """Decoder for the Theora identification header."""

    codec = CodecType.THEORA
    signature = IDENTIFICATION_SIGNATURE
    header_count = 1
    completeness = Completeness.DETECTION_ONLY

    def decode(self, index: int, packet: Packet, record: MetadataRecord) -> None:
        if index == 0:
            record.info = self.read_identification(packet)

    def read_identification(self, packet: Packet) -> TheoraInfo:
        cursor = PacketCursor(packet, start=len(IDENTIFICATION_SIGNATURE), byteorder=">")
        major, minor, revision = cursor.unpack("BBB", "version")
        if major != SUPPORTED_MAJOR_VERSION:
            raise UnsupportedCodecVersion(
                f"Unsupported Theora version {major}.{minor}.{revision}",
                packet.serial,
                packet.offset,
            )
        frame_width_mbs, frame_height_mbs = cursor.unpack("HH", "frame size")
        picture_width = cursor.u24("picture width")
        picture_height = cursor.u24("picture height")
        picture_x, picture_y = cursor.unpack("BB", "picture offset")
        fps_numerator, fps_denominator = cursor.unpack("II", "frame rate")
        aspect_numerator = cursor.u24("aspect numerator")
        aspect_denominator = cursor.u24("aspect denominator")
        colorspace = cursor.u8("colorspace")
        nominal_bitrate = cursor.u24("nominal bitrate")
        # QUAL(6) KFGSHIFT(5) PF(2) reserved(3)
        bits = cursor.u16("quality flags")

        return TheoraInfo(
            version_major=major,
            version_minor=minor,
            version_revision=revision,
            frame_width_mbs=frame_width_mbs,
            frame_height_mbs=frame_height_mbs,
            picture_width=picture_width,
            picture_height=picture_height,
            picture_x=picture_x,
            picture_y=picture_y,
            frame_rate_numerator=fps_numerator,
            frame_rate_denominator=fps_denominator,
            aspect_numerator=aspect_numerator,
            aspect_denominator=aspect_denominator,
            colorspace=colorspace,
            nominal_bitrate=nominal_bitrate,
            quality=bits >> 10,
            keyframe_granule_shift=(bits >> 5) & 0x1F,
            pixel_format=(bits >> 3) & 0x03,
        )

    def duration(self, record: MetadataRecord, granule_position: int) -> float | None:
        info = record.info
        if not isinstance(info, TheoraInfo) or not info.frame_rate_numerator:
            return None
        shift = info.keyframe_granule_shift
        frames = (granule_position >> shift) + (granule_position & ((1 << shift) - 1))
        return frames * info.frame_rate_denominator / info.frame_rate_numerator
