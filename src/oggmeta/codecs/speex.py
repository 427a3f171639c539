"""Speex header.

The header is a fixed 80-byte little-endian structure:

    speex_string[8], speex_version[20], speex_version_id, header_size, rate,
    mode, mode_bitstream_version, nb_channels, bitrate, frame_size, vbr,
    frames_per_packet, extra_headers, reserved1, reserved2

See: https://www.speex.org/docs/manual/speex-manual/node8.html
"""

from oggmeta.codecs.base import BaseHeaderDecoder, PacketCursor
from oggmeta.container.demux import Packet
from oggmeta.models import CodecType, Completeness, MetadataRecord, SpeexInfo

SIGNATURE = b"Speex   "
VERSION_STRING_SIZE = 20


class SpeexDecoder(BaseHeaderDecoder):
    """Decoder for the Speex header packet."""

    codec = CodecType.SPEEX
    signature = SIGNATURE
    header_count = 1
    completeness = Completeness.DETECTION_ONLY

    def decode(self, index: int, packet: Packet, record: MetadataRecord) -> None:
        if index == 0:
            record.info = self.read_header(packet)

    def read_header(self, packet: Packet) -> SpeexInfo:
        cursor = PacketCursor(packet, start=len(SIGNATURE))
        version = cursor.read(VERSION_STRING_SIZE, "version string")
        (
            version_id,
            header_size,
            rate,
            mode,
            mode_bitstream_version,
            channels,
            bitrate,
            frame_size,
            vbr,
            frames_per_packet,
            extra_headers,
            _reserved1,
            _reserved2,
        ) = cursor.unpack("13i", "header fields")

        return SpeexInfo(
            version_string=version.split(b"\x00", 1)[0].decode("ascii", errors="replace"),
            version_id=version_id,
            header_size=header_size,
            sample_rate=rate,
            mode=mode,
            mode_bitstream_version=mode_bitstream_version,
            channels=channels,
            bitrate=bitrate,
            frame_size=frame_size,
            vbr=bool(vbr),
            frames_per_packet=frames_per_packet,
            extra_headers=extra_headers,
        )

    def duration(self, record: MetadataRecord, granule_position: int) -> float | None:
        sample_rate = record.sample_rate
        if not sample_rate:
            return None
        return granule_position / sample_rate
